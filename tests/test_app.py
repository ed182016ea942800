from __future__ import annotations

import random
from pathlib import Path

from snaketerra.app import AppState, SnakeTerraApp, command_for_key
from snaketerra.audio import AudioManager
from snaketerra.engine import Command, EndReason, GameView
from snaketerra.leaderboard import Leaderboard, ScoreEntry
from snaketerra.menu import Menu, MenuItem
from snaketerra.renderer import GameOverSummary, Renderer
from snaketerra.settings import Difficulty, SettingsManager


class FakeRenderer(Renderer):
    """Scripted keys in, recorded frames out."""

    def __init__(self, keys: list[str], name: str = "Al!ice", size: tuple[int, int] = (60, 200)) -> None:
        self.keys = list(keys)
        self.name = name
        self.terminal_size = size
        self.frames: list[GameView] = []
        self.messages: list[list[str]] = []
        self.game_overs: list[GameOverSummary] = []
        self.leaderboards: list[list[ScoreEntry]] = []
        self.difficulty_screens: list[str] = []
        self.prompts = 0

    def size(self) -> tuple[int, int]:
        return self.terminal_size

    def poll_key(self) -> str | None:
        return None

    def wait_key(self) -> str:
        return self.keys.pop(0)

    def draw_main_menu(self, menu: Menu, difficulty_label: str, sound_on: bool) -> None:
        pass

    def draw_difficulty(self, menu: Menu) -> None:
        self.difficulty_screens.append(menu.current_action())

    def draw_leaderboard(self, entries: list[ScoreEntry]) -> None:
        self.leaderboards.append(entries)

    def draw_game(self, view: GameView, top: list[ScoreEntry]) -> None:
        self.frames.append(view)

    def draw_message(self, lines: list[str]) -> None:
        self.messages.append(lines)

    def prompt_name(self, score: int) -> str:
        self.prompts += 1
        return self.name

    def draw_game_over(self, summary: GameOverSummary, top: list[ScoreEntry]) -> None:
        self.game_overs.append(summary)


class FakeClock:
    def __init__(self, step_ms: int = 1000) -> None:
        self.step_ms = step_ms

    def tick(self, framerate: int = 0) -> int:
        return self.step_ms


def _app(data_dir: Path, renderer: FakeRenderer) -> SnakeTerraApp:
    return SnakeTerraApp(
        renderer,
        SettingsManager(),
        Leaderboard(data_dir / "leaderboard.txt"),
        AudioManager(data_dir, enabled=False),
        clock=FakeClock(),
        rng=random.Random(5),
    )


def test_command_for_key() -> None:
    assert command_for_key("up") == Command.UP
    assert command_for_key("a") == Command.LEFT
    assert command_for_key("p") == Command.PAUSE
    assert command_for_key("q") == Command.QUIT
    assert command_for_key("x") is None
    assert command_for_key(None) is None


def test_menu_wraps_selection() -> None:
    menu = Menu("T", [MenuItem("a", "a"), MenuItem("b", "b")])
    menu.move(-1)
    assert menu.current_action() == "b"
    menu.move(1)
    assert menu.current_action() == "a"


def test_quit_from_main_menu_exits(data_dir: Path) -> None:
    app = _app(data_dir, FakeRenderer(["q"]))
    assert app.run() == 0
    assert app.state == AppState.EXIT


def test_play_until_wall_records_score(data_dir: Path) -> None:
    renderer = FakeRenderer(["enter", "q"])
    app = _app(data_dir, renderer)
    assert app.run() == 0

    assert renderer.frames
    assert renderer.prompts == 1
    summary = renderer.game_overs[-1]
    assert summary.reason == EndReason.OUT_OF_BOUNDS
    assert summary.name == "Alice"
    assert summary.rank == 1
    assert app.leaderboard.all()[0].name == "Alice"
    assert (data_dir / "leaderboard.txt").exists()


def test_restart_loops_without_nesting(data_dir: Path) -> None:
    renderer = FakeRenderer(["enter", "r", "r", "m", "q"])
    app = _app(data_dir, renderer)
    app.run()
    assert renderer.prompts == 3
    assert len(app.leaderboard) == 3
    assert len(renderer.game_overs) == 3


def test_change_difficulty_persists(data_dir: Path) -> None:
    renderer = FakeRenderer(["down", "enter", "right", "enter", "q"])
    app = _app(data_dir, renderer)
    app.run()
    assert renderer.difficulty_screens == ["normal", "hard"]
    assert app.settings.difficulty == Difficulty.HARD
    assert SettingsManager().settings.difficulty == Difficulty.HARD


def test_escape_leaves_difficulty_unchanged(data_dir: Path) -> None:
    renderer = FakeRenderer(["down", "enter", "left", "escape", "q"])
    app = _app(data_dir, renderer)
    app.run()
    assert app.settings.difficulty == Difficulty.NORMAL


def test_leaderboard_screen_reloads_from_disk(data_dir: Path) -> None:
    (data_dir / "leaderboard.txt").write_text('"Zed" 9\n', encoding="utf-8")
    renderer = FakeRenderer(["down", "down", "enter", "x", "q"])
    app = _app(data_dir, renderer)
    app.run()
    assert renderer.leaderboards == [[ScoreEntry("Zed", 9)]]


def test_small_terminal_returns_to_menu(data_dir: Path) -> None:
    renderer = FakeRenderer(["enter", "x", "q"], size=(10, 40))
    app = _app(data_dir, renderer)
    app.run()
    assert renderer.messages
    assert renderer.frames == []
    assert renderer.prompts == 0


def test_paused_game_resumes_on_any_key(data_dir: Path) -> None:
    app = _app(data_dir, FakeRenderer([]))
    app.engine.play()
    app._handle_gameplay_key("p")
    assert app.engine.paused
    app._handle_gameplay_key("x")
    assert not app.engine.paused
    app._handle_gameplay_key("p")
    app._handle_gameplay_key("q")
    assert app.engine.end_reason == EndReason.QUIT
