"""Session driver: menus, play loop and game-over flow."""

from __future__ import annotations

from enum import Enum, auto
from typing import Callable, Protocol
import logging
import random

import pygame

from .audio import AudioManager
from .engine import Command, GameEngine
from .leaderboard import Leaderboard
from .menu import Menu, MenuItem
from .renderer import (
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_UP,
    GameOverSummary,
    Renderer,
    required_terminal_size,
)
from .settings import DIFFICULTY_ORDER, Difficulty, GameSettings, SettingsManager
from .utils import FPS

logger = logging.getLogger(__name__)

COMMAND_KEYS = {
    KEY_UP: Command.UP,
    "w": Command.UP,
    KEY_DOWN: Command.DOWN,
    "s": Command.DOWN,
    KEY_LEFT: Command.LEFT,
    "a": Command.LEFT,
    KEY_RIGHT: Command.RIGHT,
    "d": Command.RIGHT,
    "p": Command.PAUSE,
    KEY_ESCAPE: Command.PAUSE,
    "q": Command.QUIT,
}


def command_for_key(key: str | None) -> Command | None:
    """Translate a key name into a gameplay command."""
    if key is None:
        return None
    return COMMAND_KEYS.get(key)


class FrameClock(Protocol):
    def tick(self, framerate: int = 0) -> int: ...


class AppState(Enum):
    """Top-level screens of the application."""

    MAIN_MENU = auto()
    DIFFICULTY = auto()
    LEADERBOARD = auto()
    PLAYING = auto()
    GAME_OVER = auto()
    EXIT = auto()


class SnakeTerraApp:
    """Runs the menu -> play -> game-over cycle until the player quits."""

    def __init__(
        self,
        renderer: Renderer,
        settings_manager: SettingsManager,
        leaderboard: Leaderboard,
        audio: AudioManager,
        clock: FrameClock | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.renderer = renderer
        self.settings_manager = settings_manager
        self.leaderboard = leaderboard
        self.audio = audio
        self.clock: FrameClock = clock if clock is not None else pygame.time.Clock()

        settings = self.settings
        self.engine = GameEngine(settings.rows, settings.cols, settings.difficulty, rng=rng)
        self.state = AppState.MAIN_MENU
        self.summary: GameOverSummary | None = None
        self.difficulty_menu = Menu(
            title="Difficulty",
            items=[MenuItem(difficulty.label, difficulty.value) for difficulty in DIFFICULTY_ORDER],
            selected=settings.difficulty.value,
        )
        self.main_menu = Menu(
            title="SNAKE TERRA",
            items=[
                MenuItem("Start Game", "play"),
                MenuItem("Change Difficulty", "difficulty"),
                MenuItem("Leaderboards", "scores"),
                MenuItem("Toggle Sound", "sound"),
                MenuItem("Quit", "exit"),
            ],
        )
        self._handlers: dict[AppState, Callable[[], AppState]] = {
            AppState.MAIN_MENU: self._main_menu,
            AppState.DIFFICULTY: self._difficulty_screen,
            AppState.LEADERBOARD: self._leaderboard_screen,
            AppState.PLAYING: self._play_session,
            AppState.GAME_OVER: self._game_over_screen,
        }

    @property
    def settings(self) -> GameSettings:
        return self.settings_manager.settings

    def run(self) -> int:
        """Loop over screens until EXIT; return the process exit code."""
        logger.info("SnakeTerra started")
        while self.state != AppState.EXIT:
            self.state = self._handlers[self.state]()
        self.audio.shutdown()
        logger.info("SnakeTerra exited")
        return 0

    def _main_menu(self) -> AppState:
        self.renderer.draw_main_menu(self.main_menu, self.settings.difficulty.label, self.settings.sound_enabled)
        key = self.renderer.wait_key()
        if key == KEY_UP:
            self.main_menu.move(-1)
            self.audio.play("menu")
            return AppState.MAIN_MENU
        if key == KEY_DOWN:
            self.main_menu.move(1)
            self.audio.play("menu")
            return AppState.MAIN_MENU
        if key == "q":
            return AppState.EXIT
        if key != KEY_ENTER:
            return AppState.MAIN_MENU

        action = self.main_menu.current_action()
        self.audio.play("menu")
        if action == "play":
            return AppState.PLAYING
        if action == "difficulty":
            self.difficulty_menu.select(self.settings.difficulty.value)
            return AppState.DIFFICULTY
        if action == "scores":
            self.leaderboard.load()
            return AppState.LEADERBOARD
        if action == "sound":
            self.audio.set_muted(not self.settings_manager.toggle_sound())
            return AppState.MAIN_MENU
        return AppState.EXIT

    def _difficulty_screen(self) -> AppState:
        self.renderer.draw_difficulty(self.difficulty_menu)
        key = self.renderer.wait_key()
        if key == KEY_LEFT:
            self.difficulty_menu.move(-1)
        elif key == KEY_RIGHT:
            self.difficulty_menu.move(1)
        elif key == KEY_ENTER:
            self.settings_manager.set_difficulty(Difficulty(self.difficulty_menu.current_action()))
            logger.info("Difficulty set to %s", self.settings.difficulty.label)
            return AppState.MAIN_MENU
        elif key == KEY_ESCAPE:
            return AppState.MAIN_MENU
        return AppState.DIFFICULTY

    def _leaderboard_screen(self) -> AppState:
        self.renderer.draw_leaderboard(self.leaderboard.all())
        self.renderer.wait_key()
        return AppState.MAIN_MENU

    def _terminal_fits(self) -> bool:
        need_lines, need_cols = required_terminal_size(self.engine.rows, self.engine.cols)
        lines, cols = self.renderer.size()
        if lines >= need_lines and cols >= need_cols:
            return True
        logger.info("Terminal %dx%d too small, need %dx%d", cols, lines, need_cols, need_lines)
        self.renderer.draw_message(
            [
                "Terminal too small for the game board.",
                f"Required: at least {need_cols} cols x {need_lines} rows. Current: {cols} x {lines}.",
                "Resize the terminal and press any key to continue.",
            ]
        )
        self.renderer.wait_key()
        return False

    def _play_session(self) -> AppState:
        if not self._terminal_fits():
            return AppState.MAIN_MENU

        engine = self.engine
        engine.difficulty = self.settings.difficulty
        engine.play()
        self.clock.tick(FPS)
        while engine.running:
            self._handle_gameplay_key(self.renderer.poll_key())
            score_before = engine.score
            engine.update(self.clock.tick(FPS))
            if engine.score > score_before:
                self.audio.play("eat")
            self.renderer.draw_game(engine.snapshot(), self.leaderboard.top(3))

        self.audio.play("win" if engine.won else "crash")
        name = self.renderer.prompt_name(engine.score)
        entry = self.leaderboard.add(name, engine.score)
        self.summary = GameOverSummary(
            name=entry.name,
            score=entry.score,
            reason=engine.end_reason,
            rank=self.leaderboard.rank_of(entry),
        )
        return AppState.GAME_OVER

    def _handle_gameplay_key(self, key: str | None) -> None:
        command = command_for_key(key)
        if self.engine.paused and key is not None and command != Command.QUIT:
            self.engine.apply(Command.PAUSE)
            return
        if command is not None:
            self.engine.apply(command)

    def _game_over_screen(self) -> AppState:
        if self.summary is None:
            return AppState.MAIN_MENU
        self.renderer.draw_game_over(self.summary, self.leaderboard.top(5))
        key = self.renderer.wait_key()
        if key == "r":
            return AppState.PLAYING
        if key == "m":
            return AppState.MAIN_MENU
        if key == "q":
            return AppState.EXIT
        return AppState.GAME_OVER
