"""SnakeTerra: terminal Snake with difficulty presets and a persisted leaderboard."""

import os

# pygame greets on import; curses owns the terminal.
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

__version__ = "1.0.0"
