"""
Detection banner widget for FindAR.

Full-width label showing the most confident object and its score.
"""

from kivy.graphics import Color, Rectangle
from kivy.uix.label import Label


class DetectionLabel(Label):
    """
    Banner with a semi-transparent black background.

    Layout:
    ┌─────────────────────────────────────┐
    │          Sharp object 87%           │
    └─────────────────────────────────────┘
    """

    def __init__(self, **kwargs):
        kwargs.setdefault("text", "")
        kwargs.setdefault("font_size", "18sp")
        kwargs.setdefault("bold", True)
        kwargs.setdefault("color", (1, 1, 1, 1))
        kwargs.setdefault("halign", "center")
        kwargs.setdefault("valign", "middle")
        kwargs.setdefault("size_hint", (1, None))
        kwargs.setdefault("height", 50)
        super().__init__(**kwargs)

        self.bind(size=self.setter("text_size"))

        with self.canvas.before:
            Color(0, 0, 0, 0.7)
            self._bg_rect = Rectangle(pos=self.pos, size=self.size)
        self.bind(pos=self._update_background, size=self._update_background)

    def _update_background(self, *args):
        self._bg_rect.pos = self.pos
        self._bg_rect.size = self.size
