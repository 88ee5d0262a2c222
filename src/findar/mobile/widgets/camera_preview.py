"""
Live camera preview widget for FindAR.
"""

import logging

import cv2
import numpy as np
from kivy.clock import Clock
from kivy.graphics.texture import Texture
from kivy.uix.image import Image

logger = logging.getLogger(__name__)


def to_texture_bytes(frame: np.ndarray) -> bytes:
    """BGR frame to bottom-up RGB bytes, the layout Kivy textures expect."""
    return cv2.flip(cv2.cvtColor(frame, cv2.COLOR_BGR2RGB), 0).tobytes()


class CameraPreview(Image):
    """
    Image widget fed by the capture thread.

    `update_frame` may be called from any thread; the texture is only
    touched on the main thread. The texture is recreated when the frame
    size changes.
    """

    def update_frame(self, frame: np.ndarray) -> None:
        if frame is None:
            return
        Clock.schedule_once(lambda dt: self.show_frame(frame), 0)

    def show_frame(self, frame: np.ndarray) -> None:
        """Blit a frame into the texture (main thread only)."""
        height, width = frame.shape[:2]
        try:
            data = to_texture_bytes(frame)
        except cv2.error as e:
            logger.error(f"Error converting preview frame: {e}")
            return

        texture = self.texture
        if texture is None or texture.size != (width, height):
            texture = Texture.create(size=(width, height), colorfmt="rgb")
            self.texture = texture

        texture.blit_buffer(data, colorfmt="rgb", bufferfmt="ubyte")
        self.canvas.ask_update()
