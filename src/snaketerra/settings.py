"""Settings persistence and runtime configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
import logging

from . import utils
from .utils import DEFAULT_COLS, DEFAULT_ROWS, MAX_BOARD_SIZE, MIN_BOARD_SIZE, load_json, save_json

logger = logging.getLogger(__name__)


class Difficulty(str, Enum):
    """Difficulty presets controlling the base tick interval."""

    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"

    @property
    def base_interval_ms(self) -> int:
        return _BASE_INTERVALS_MS[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()


_BASE_INTERVALS_MS = {
    Difficulty.EASY: 220,
    Difficulty.NORMAL: 140,
    Difficulty.HARD: 80,
}

DIFFICULTY_ORDER = [Difficulty.EASY, Difficulty.NORMAL, Difficulty.HARD]


@dataclass(slots=True)
class GameSettings:
    """Persistent settings for the game."""

    difficulty: Difficulty = Difficulty.NORMAL
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    sound_enabled: bool = True


class SettingsManager:
    """Load, save, and mutate game settings."""

    def __init__(self) -> None:
        utils.ensure_data_dirs()
        self.settings = self.load()

    def load(self) -> GameSettings:
        """Load game settings from disk with safe defaults."""
        raw = load_json(utils.SETTINGS_FILE, {})
        settings = GameSettings()
        if not isinstance(raw, dict):
            logger.warning("Ignoring malformed settings file %s", utils.SETTINGS_FILE)
            return settings

        if raw.get("difficulty") in {e.value for e in Difficulty}:
            settings.difficulty = Difficulty(raw["difficulty"])

        settings.rows = self._load_size(raw.get("rows"), settings.rows)
        settings.cols = self._load_size(raw.get("cols"), settings.cols)
        settings.sound_enabled = bool(raw.get("sound_enabled", settings.sound_enabled))
        return settings

    @staticmethod
    def _load_size(value: object, default: int) -> int:
        try:
            size = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return default
        if not MIN_BOARD_SIZE <= size <= MAX_BOARD_SIZE:
            return default
        return size

    def save(self) -> None:
        """Persist settings to disk."""
        payload = asdict(self.settings)
        payload["difficulty"] = self.settings.difficulty.value
        try:
            save_json(utils.SETTINGS_FILE, payload)
        except OSError:
            logger.warning("Could not write settings to %s", utils.SETTINGS_FILE, exc_info=True)

    def set_difficulty(self, difficulty: Difficulty) -> None:
        """Update difficulty and persist settings."""
        self.settings.difficulty = difficulty
        self.save()

    def cycle_difficulty(self, delta: int = 1) -> Difficulty:
        """Cycle difficulty and persist settings."""
        idx = DIFFICULTY_ORDER.index(self.settings.difficulty)
        self.settings.difficulty = DIFFICULTY_ORDER[(idx + delta) % len(DIFFICULTY_ORDER)]
        self.save()
        return self.settings.difficulty

    def toggle_sound(self) -> bool:
        """Flip the sound setting and save."""
        self.settings.sound_enabled = not self.settings.sound_enabled
        self.save()
        return self.settings.sound_enabled
