"""Pytest configuration for headless tests."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every save file at a temporary directory."""
    from snaketerra import utils

    monkeypatch.setattr(utils, "DATA_DIR", tmp_path)
    monkeypatch.setattr(utils, "SETTINGS_FILE", tmp_path / "settings.json")
    monkeypatch.setattr(utils, "LEADERBOARD_FILE", tmp_path / "leaderboard.txt")
    monkeypatch.setattr(utils, "LOG_FILE", tmp_path / "snaketerra.log")
    return tmp_path
