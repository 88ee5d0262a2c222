"""
Alert sound playback using Kivy's audio providers.

Audio is optional: any failure while setting it up is logged and leaves the
player disabled for the rest of the run.
"""

import logging
import os
from pathlib import Path
from typing import Any, Callable

logger = logging.getLogger(__name__)


def configure_audio_session(backend: str | None = None) -> bool:
    """
    Select the Kivy audio provider.

    Must run before kivy.core.audio is first imported; the provider choice
    is read from KIVY_AUDIO at import time.

    Args:
        backend: Provider list such as "sdl2,gstreamer", or None for Kivy's default.

    Returns:
        True if an audio provider is available.
    """
    if backend:
        os.environ.setdefault("KIVY_AUDIO", backend)

    try:
        from kivy.core.audio import SoundLoader  # noqa: F401
    except Exception as e:
        logger.error(f"Failed to set up audio session: {e}")
        return False
    return True


class AlertPlayer:
    """
    Single preloaded alert sound.

    Playing while the sound is already playing restarts it from the start;
    there is no queue.
    """

    def __init__(
        self,
        sound_path: Path | str,
        volume: float = 1.0,
        loader: Callable[[str], Any] | None = None,
    ):
        """
        Args:
            sound_path: Bundled sound file.
            volume: Playback volume from 0.0 to 1.0.
            loader: Callable returning a Kivy-style Sound for a filename.
                Defaults to kivy.core.audio.SoundLoader.load.
        """
        self.sound_path = Path(sound_path)
        self.volume = volume
        self._loader = loader
        self._sound: Any = None

    def setup(self) -> bool:
        """
        Load the sound.

        Returns:
            True if the player is ready, False if audio stays disabled.
        """
        if not self.sound_path.exists():
            logger.error(f"Unable to find sound file: {self.sound_path}")
            return False

        loader = self._loader
        if loader is None:
            from kivy.core.audio import SoundLoader

            loader = SoundLoader.load

        try:
            sound = loader(str(self.sound_path))
        except Exception as e:
            logger.error(f"Unable to initialize alert sound: {e}")
            return False

        if sound is None:
            logger.error(f"Unable to initialize alert sound: no provider for {self.sound_path.name}")
            return False

        sound.volume = self.volume
        self._sound = sound
        logger.info(f"Alert sound loaded: {self.sound_path.name}")
        return True

    def play(self) -> None:
        """Play the alert from the beginning. Does nothing when disabled."""
        if self._sound is None:
            return
        self._sound.stop()
        self._sound.play()

    def release(self) -> None:
        if self._sound is not None:
            self._sound.stop()
            self._sound.unload()
            self._sound = None

    @property
    def is_available(self) -> bool:
        return self._sound is not None
