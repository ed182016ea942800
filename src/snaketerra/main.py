"""Executable entrypoint for SnakeTerra."""

from __future__ import annotations

from pathlib import Path
import curses
import logging
import os

from . import utils
from .app import SnakeTerraApp
from .audio import AudioManager
from .leaderboard import Leaderboard
from .renderer import CursesRenderer
from .settings import SettingsManager

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging() -> None:
    """Send log records to the data directory; the terminal belongs to curses."""
    utils.ensure_data_dirs()
    level_name = os.environ.get("SNAKETERRA_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        filename=utils.LOG_FILE,
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )


def main() -> int:
    """Launch the game."""
    configure_logging()
    root = Path(__file__).resolve().parents[2]
    settings_manager = SettingsManager()
    leaderboard = Leaderboard(utils.LEADERBOARD_FILE)
    audio = AudioManager(root, enabled=settings_manager.settings.sound_enabled)
    audio.load_assets()

    def session(stdscr: curses.window) -> int:
        app = SnakeTerraApp(CursesRenderer(stdscr), settings_manager, leaderboard, audio)
        return app.run()

    return curses.wrapper(session)


if __name__ == "__main__":
    raise SystemExit(main())
