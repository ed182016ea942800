from __future__ import annotations

from pathlib import Path

from snaketerra.audio import AudioManager


def test_disabled_audio_is_silent_noop(tmp_path: Path) -> None:
    audio = AudioManager(tmp_path, enabled=False)
    audio.load_assets()
    audio.play("eat")
    assert audio.sounds == {}
    assert audio.muted
    audio.shutdown()


def test_missing_assets_load_nothing(tmp_path: Path) -> None:
    audio = AudioManager(tmp_path)
    audio.load_assets()
    assert audio.sounds == {}
    audio.play("crash")
    audio.shutdown()
    assert not audio.sound_enabled
