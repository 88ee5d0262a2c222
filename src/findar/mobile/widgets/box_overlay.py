"""
Bounding box overlay widget for FindAR.

Sits on top of the camera preview and draws one rounded red outline per
detection. The whole canvas is rebuilt for every frame.
"""

from kivy.graphics import Color, Line
from kivy.uix.widget import Widget


class BoxOverlay(Widget):
    """Transparent layer holding the current frame's bounding boxes."""

    def __init__(
        self,
        box_color: tuple[float, float, float, float] = (1.0, 0.0, 0.0, 1.0),
        line_width: float = 2.0,
        corner_radius: float = 3.0,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.box_color = tuple(box_color)
        self.line_width = line_width
        self.corner_radius = corner_radius

    def clear(self) -> None:
        """Remove every box."""
        self.canvas.clear()

    def add_box(self, rect: tuple[float, float, float, float]) -> None:
        """
        Draw a box.

        Args:
            rect: (x, y, w, h) in widget pixels with the origin at the
                widget's top-left corner.
        """
        x, y, w, h = rect

        # Kivy's y axis points up from the bottom edge
        left = self.x + x
        bottom = self.y + self.height - (y + h)

        with self.canvas:
            Color(*self.box_color)
            Line(
                rounded_rectangle=(left, bottom, w, h, self.corner_radius),
                width=self.line_width,
            )
