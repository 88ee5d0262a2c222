"""
Camera input for the capture session.

Opens an OpenCV capture device, or a video file standing in for one.
"""

import logging
from dataclasses import dataclass
from typing import Any

import cv2
import numpy as np

logger = logging.getLogger(__name__)

BACKENDS = {
    "CAP_ANY": cv2.CAP_ANY,
    "CAP_MSMF": cv2.CAP_MSMF,
    "CAP_DSHOW": cv2.CAP_DSHOW,
    "CAP_V4L2": cv2.CAP_V4L2,
    "CAP_AVFOUNDATION": cv2.CAP_AVFOUNDATION,
}


@dataclass
class CameraSettings:
    """Requested capture settings. The driver may not honour all of them."""

    source: int | str = 0
    backend: str = "CAP_ANY"
    width: int = 1280
    height: int = 720
    fps: int = 30
    buffer_size: int = 1

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "CameraSettings":
        fields = cls.__dataclass_fields__
        return cls(**{key: value for key, value in config.items() if key in fields})


class Camera:
    """
    Frame source backed by cv2.VideoCapture.

    Usage:
        camera = Camera(config['camera'])
        if camera.open():
            frame = camera.read()
        camera.release()
    """

    def __init__(self, config: dict[str, Any]):
        self.settings = CameraSettings.from_config(config)
        self._cap: cv2.VideoCapture | None = None

    def open(self) -> bool:
        """
        Acquire the device and apply the settings.

        Returns:
            True if frames can be read.
        """
        if self._cap is not None:
            return True

        source = self.settings.source
        try:
            if isinstance(source, str):
                cap = cv2.VideoCapture(source)
            else:
                cap = cv2.VideoCapture(source, BACKENDS.get(self.settings.backend, cv2.CAP_ANY))
        except cv2.error as e:
            logger.error(f"Error opening camera: {e}")
            return False

        if not cap.isOpened():
            logger.error(f"Failed to open camera source: {source}")
            cap.release()
            return False

        self._cap = cap
        self._apply_settings()
        return True

    def _apply_settings(self) -> None:
        cap = self._cap
        settings = self.settings
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, settings.width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, settings.height)
        cap.set(cv2.CAP_PROP_FPS, settings.fps)
        # Depth 1: frames that arrive while one is being processed are dropped
        cap.set(cv2.CAP_PROP_BUFFERSIZE, settings.buffer_size)

        width = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        height = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        logger.info(
            f"Camera opened: source={settings.source}, "
            f"resolution={width}x{height}, fps={cap.get(cv2.CAP_PROP_FPS)}"
        )
        if (width, height) != (settings.width, settings.height):
            logger.warning(
                f"Camera resolution differs from requested "
                f"{settings.width}x{settings.height}"
            )

    def read(self) -> np.ndarray | None:
        """Next BGR frame, or None if the device has nothing to give."""
        if self._cap is None:
            return None
        ok, frame = self._cap.read()
        return frame if ok else None

    def release(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None
            logger.info("Camera released")
