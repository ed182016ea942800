"""Screen drawing and key input for the terminal."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import curses

from .engine import EndReason, GameView
from .leaderboard import ScoreEntry
from .menu import Menu
from .utils import CELL_WIDTH

KEY_UP = "up"
KEY_DOWN = "down"
KEY_LEFT = "left"
KEY_RIGHT = "right"
KEY_ENTER = "enter"
KEY_ESCAPE = "escape"
KEY_RESIZE = "resize"

INFO_PANEL_WIDTH = 28
LAYOUT_MARGIN = 2

BANNER = (
    " ####  #   #   ###   #  #  ####    #####  ####  ####   ####    ###  ",
    "#      ##  #  #   #  # #   #         #    #     #   #  #   #  #   # ",
    " ###   # # #  #####  ##    ###       #    ###   ####   ####   ##### ",
    "    #  #  ##  #   #  # #   #         #    #     #  #   #  #   #   # ",
    "####   #   #  #   #  #  #  ####      #    ####  #   #  #   #  #   # ",
)

PAIR_SNAKE = 1
PAIR_FOOD = 2
PAIR_TEXT = 3
PAIR_HIGHLIGHT = 4
PAIR_BANNER = 5

REASON_TEXT = {
    EndReason.OUT_OF_BOUNDS: "You hit the wall.",
    EndReason.SELF_COLLISION: "You ran into yourself.",
    EndReason.BOARD_FULL: "Board cleared - you win!",
    EndReason.QUIT: "Game abandoned.",
}


def required_terminal_size(rows: int, cols: int) -> tuple[int, int]:
    """Return (lines, columns) needed for the board plus the info panel."""
    board_w = cols * CELL_WIDTH + 2
    board_h = rows + 2
    return board_h + 2 * LAYOUT_MARGIN, board_w + INFO_PANEL_WIDTH + 3 * LAYOUT_MARGIN


@dataclass(frozen=True, slots=True)
class GameOverSummary:
    """What the game-over screen reports."""

    name: str
    score: int
    reason: EndReason | None
    rank: int | None


class Renderer(ABC):
    """Drawing and input capability the session driver depends on."""

    @abstractmethod
    def size(self) -> tuple[int, int]:
        """Return the terminal size as (lines, columns)."""

    @abstractmethod
    def poll_key(self) -> str | None:
        """Return the next pending key without blocking."""

    @abstractmethod
    def wait_key(self) -> str:
        """Block until a key is pressed."""

    @abstractmethod
    def draw_main_menu(self, menu: Menu, difficulty_label: str, sound_on: bool) -> None: ...

    @abstractmethod
    def draw_difficulty(self, menu: Menu) -> None: ...

    @abstractmethod
    def draw_leaderboard(self, entries: list[ScoreEntry]) -> None: ...

    @abstractmethod
    def draw_game(self, view: GameView, top: list[ScoreEntry]) -> None: ...

    @abstractmethod
    def draw_message(self, lines: list[str]) -> None: ...

    @abstractmethod
    def prompt_name(self, score: int) -> str:
        """Ask the player for a leaderboard name."""

    @abstractmethod
    def draw_game_over(self, summary: GameOverSummary, top: list[ScoreEntry]) -> None: ...


def translate_key(ch: int) -> str | None:
    """Map a curses key code onto the renderer's key names."""
    if ch == -1:
        return None
    special = {
        curses.KEY_UP: KEY_UP,
        curses.KEY_DOWN: KEY_DOWN,
        curses.KEY_LEFT: KEY_LEFT,
        curses.KEY_RIGHT: KEY_RIGHT,
        curses.KEY_ENTER: KEY_ENTER,
        curses.KEY_RESIZE: KEY_RESIZE,
        10: KEY_ENTER,
        13: KEY_ENTER,
        27: KEY_ESCAPE,
    }
    if ch in special:
        return special[ch]
    if 32 <= ch < 127:
        return chr(ch).lower()
    return None


class CursesRenderer(Renderer):
    """Renderer drawing into a curses standard screen."""

    def __init__(self, stdscr: curses.window) -> None:
        self.stdscr = stdscr
        self.stdscr.keypad(True)
        self.stdscr.nodelay(True)
        curses.noecho()
        curses.cbreak()
        self._set_cursor(0)
        self.colors = False
        if curses.has_colors():
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(PAIR_SNAKE, curses.COLOR_BLACK, curses.COLOR_GREEN)
            curses.init_pair(PAIR_FOOD, curses.COLOR_RED, -1)
            curses.init_pair(PAIR_TEXT, curses.COLOR_WHITE, -1)
            curses.init_pair(PAIR_HIGHLIGHT, curses.COLOR_YELLOW, -1)
            curses.init_pair(PAIR_BANNER, curses.COLOR_CYAN, -1)
            self.colors = True

    @staticmethod
    def _set_cursor(visibility: int) -> None:
        try:
            curses.curs_set(visibility)
        except curses.error:
            pass

    def _attr(self, pair: int) -> int:
        return curses.color_pair(pair) if self.colors else 0

    @staticmethod
    def _put(win: curses.window, y: int, x: int, text: str, attr: int = 0) -> None:
        """Write text, ignoring the error curses raises at the bottom-right cell."""
        try:
            win.addstr(y, x, text, attr)
        except curses.error:
            pass

    def _panel(self, height: int, width: int, y: int, x: int, title: str = "") -> curses.window:
        lines, cols = self.size()
        y, x = max(0, y), max(0, x)
        height = max(3, min(height, lines - y))
        width = max(4, min(width, cols - x))
        win = curses.newwin(height, width, y, x)
        win.erase()
        win.box()
        if title:
            self._put(win, 0, 2, f" {title} ")
        return win

    def _centered_panel(self, height: int, width: int, title: str = "") -> curses.window:
        lines, cols = self.size()
        return self._panel(height, width, (lines - height) // 2, (cols - width) // 2, title)

    def size(self) -> tuple[int, int]:
        return self.stdscr.getmaxyx()

    def poll_key(self) -> str | None:
        return translate_key(self.stdscr.getch())

    def wait_key(self) -> str:
        self.stdscr.nodelay(False)
        try:
            while True:
                key = translate_key(self.stdscr.getch())
                if key is not None:
                    return key
        finally:
            self.stdscr.nodelay(True)

    def _clear(self) -> None:
        self.stdscr.erase()
        self.stdscr.noutrefresh()

    def draw_main_menu(self, menu: Menu, difficulty_label: str, sound_on: bool) -> None:
        self._clear()
        width = max(len(BANNER[0]) + 6, 60)
        win = self._centered_panel(len(BANNER) + 12, width)
        banner_x = max(1, (width - len(BANNER[0])) // 2)
        for idx, line in enumerate(BANNER):
            self._put(win, 1 + idx, banner_x, line, self._attr(PAIR_BANNER))

        base = len(BANNER) + 2
        self._put(win, base, 3, "Up/Down to navigate, Enter to select, Q to quit.")
        self._put(win, base + 1, 3, f"Difficulty: {difficulty_label}   Sound: {'on' if sound_on else 'off'}")
        for idx, label in enumerate(menu.labels()):
            attr = curses.A_REVERSE if idx == menu.selected_index else 0
            self._put(win, base + 3 + idx, 6, label, attr)
        win.noutrefresh()
        curses.doupdate()

    def draw_difficulty(self, menu: Menu) -> None:
        self._clear()
        win = self._centered_panel(7, 60, "Difficulty")
        self._put(win, 1, 2, "Left/Right to change, Enter to accept, Esc to cancel.")
        for idx, label in enumerate(menu.labels()):
            attr = curses.A_REVERSE if idx == menu.selected_index else 0
            self._put(win, 3, 4 + idx * 15, label, attr)
        win.noutrefresh()
        curses.doupdate()

    def draw_leaderboard(self, entries: list[ScoreEntry]) -> None:
        self._clear()
        lines, cols = self.size()
        height = min(lines - 4, 20)
        win = self._centered_panel(height, min(cols - 8, 60), "Leaderboard")
        if not entries:
            self._put(win, 2, 4, "No scores yet.")
        for idx, entry in enumerate(entries[: max(0, height - 5)], start=1):
            self._put(win, 1 + idx, 4, f"{idx:>3}. {entry.name:<16} {entry.score:>6}")
        self._put(win, height - 2, 2, "Press any key to go back.")
        win.noutrefresh()
        curses.doupdate()

    def draw_game(self, view: GameView, top: list[ScoreEntry]) -> None:
        self._clear()
        board_w = view.cols * CELL_WIDTH + 2
        board_h = view.rows + 2
        board = self._panel(board_h, board_w, LAYOUT_MARGIN, LAYOUT_MARGIN, "Game")

        if view.food is not None:
            self._put(board, 1 + view.food.row, 1 + view.food.col * CELL_WIDTH, "<>", self._attr(PAIR_FOOD))
        snake_attr = self._attr(PAIR_SNAKE) if self.colors else curses.A_REVERSE
        for segment in view.body:
            if 0 <= segment.row < view.rows and 0 <= segment.col < view.cols:
                self._put(board, 1 + segment.row, 1 + segment.col * CELL_WIDTH, " " * CELL_WIDTH, snake_attr)
        if view.paused:
            self._put(board, view.rows // 2 + 1, max(1, board_w // 2 - 8), " PAUSED - any key ", curses.A_BOLD)
        board.noutrefresh()

        info = self._panel(board_h, INFO_PANEL_WIDTH, LAYOUT_MARGIN, LAYOUT_MARGIN * 2 + board_w, "Info")
        highlight = self._attr(PAIR_HIGHLIGHT)
        self._put(info, 2, 2, f"Score: {view.score}", highlight)
        self._put(info, 3, 2, f"Difficulty: {view.difficulty.label}", highlight)
        self._put(info, 4, 2, f"Length: {view.length}", highlight)
        self._put(info, 6, 2, "Top 3")
        if not top:
            self._put(info, 7, 2, "No scores yet.")
        for idx, entry in enumerate(top, start=1):
            self._put(info, 6 + idx, 2, f"{idx}) {entry.name:<12} {entry.score:>6}")
        self._put(info, board_h - 3, 2, "P pause  Q quit")
        info.noutrefresh()
        curses.doupdate()

    def draw_message(self, lines: list[str]) -> None:
        self._clear()
        width = max(len(line) for line in lines) + 6
        win = self._centered_panel(len(lines) + 2, width)
        for idx, line in enumerate(lines, start=1):
            self._put(win, idx, 2, line)
        win.noutrefresh()
        curses.doupdate()

    def prompt_name(self, score: int) -> str:
        lines, cols = self.size()
        win = self._panel(6, 60, lines // 2 - 3, max(2, (cols - 60) // 2))
        self._put(win, 1, 2, f"Game Over! Your score: {score}")
        self._put(win, 2, 2, "Enter your name (letters, digits, _ and -, max 16):")
        self._put(win, 4, 2, "> ")
        win.refresh()
        curses.echo()
        self._set_cursor(1)
        try:
            raw = win.getstr(4, 4, 32)
        except curses.error:
            raw = b""
        finally:
            curses.noecho()
            self._set_cursor(0)
        return raw.decode("utf-8", errors="ignore").strip()

    def draw_game_over(self, summary: GameOverSummary, top: list[ScoreEntry]) -> None:
        self._clear()
        height = 9 + len(top)
        win = self._centered_panel(height, 60, "Game Over")
        self._put(win, 1, 2, REASON_TEXT.get(summary.reason, "Game over."), self._attr(PAIR_HIGHLIGHT))
        self._put(win, 2, 2, f"Final score for {summary.name}: {summary.score}")
        if summary.rank is not None:
            self._put(win, 3, 2, f"Leaderboard rank: #{summary.rank}")
        self._put(win, 4, 2, "Top scores:")
        for idx, entry in enumerate(top, start=1):
            self._put(win, 4 + idx, 4, f"{idx:>2}. {entry.name:<16} {entry.score:>6}")
        self._put(win, height - 2, 2, "R restart, M menu, Q quit.")
        win.noutrefresh()
        curses.doupdate()
