"""Sound effect loading and playback."""

from __future__ import annotations

from pathlib import Path
import logging

import pygame

logger = logging.getLogger(__name__)

SOUND_NAMES = ("eat", "crash", "menu", "win")


class AudioManager:
    """Loads and plays sfx with graceful fallback when the mixer or assets are absent."""

    def __init__(self, root: Path, enabled: bool = True) -> None:
        self.root = root
        self.sound_enabled = False
        self.muted = not enabled
        self.sounds: dict[str, pygame.mixer.Sound] = {}
        if not enabled:
            return
        try:
            pygame.mixer.init()
            self.sound_enabled = True
        except pygame.error:
            logger.info("No audio device; sound disabled")
            self.sound_enabled = False

    @property
    def sound_dir(self) -> Path:
        return self.root / "assets" / "sounds"

    def load_assets(self) -> None:
        """Load available audio files from the assets folder."""
        if not self.sound_enabled:
            return
        for key in SOUND_NAMES:
            path = self.sound_dir / f"{key}.wav"
            if not path.exists():
                continue
            try:
                self.sounds[key] = pygame.mixer.Sound(str(path))
            except pygame.error:
                logger.warning("Could not load sound %s", path)
                continue

    def set_muted(self, muted: bool) -> None:
        """Mute or unmute playback, starting the mixer the first time it is needed."""
        self.muted = muted
        if not muted and not self.sound_enabled:
            try:
                pygame.mixer.init()
                self.sound_enabled = True
            except pygame.error:
                return
            self.load_assets()

    def play(self, key: str) -> None:
        """Play a named sound effect."""
        if not self.sound_enabled or self.muted:
            return
        sound = self.sounds.get(key)
        if sound:
            sound.play()

    def shutdown(self) -> None:
        if self.sound_enabled:
            pygame.mixer.quit()
            self.sound_enabled = False
