"""Shared constants and utility helpers for SnakeTerra."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any
import json

DEFAULT_ROWS = 20
DEFAULT_COLS = 30
MIN_BOARD_SIZE = 5
MAX_BOARD_SIZE = 60
CELL_WIDTH = 2
FPS = 120
MIN_TICK_INTERVAL_MS = 30

DATA_DIR = Path(".snaketerra")
SETTINGS_FILE = DATA_DIR / "settings.json"
LEADERBOARD_FILE = DATA_DIR / "leaderboard.txt"
LOG_FILE = DATA_DIR / "snaketerra.log"


@dataclass(frozen=True, slots=True)
class Point:
    """A board cell addressed by row and column."""

    row: int
    col: int

    def shifted(self, direction: Direction) -> Point:
        """Return the neighbouring cell one step along direction."""
        d_row, d_col = direction.value
        return Point(self.row + d_row, self.col + d_col)


class Direction(Enum):
    """Heading of the snake as a (row, col) unit vector."""

    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def opposite(self) -> Direction:
        d_row, d_col = self.value
        return Direction((-d_row, -d_col))


def is_opposite(a: Direction, b: Direction) -> bool:
    """Return whether two directions are opposite vectors."""
    return a.opposite is b


def in_bounds(point: Point, rows: int, cols: int) -> bool:
    """Check if a cell is inside a rows x cols board."""
    return 0 <= point.row < rows and 0 <= point.col < cols


def ensure_data_dirs() -> None:
    """Create the data directory for save files."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def load_json(path: Path, default: Any) -> Any:
    """Load JSON data, returning default when missing or malformed."""
    if not path.exists():
        return default
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except (json.JSONDecodeError, OSError):
        return default


def save_json(path: Path, payload: Any) -> None:
    """Save JSON data with deterministic formatting."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, sort_keys=True)
