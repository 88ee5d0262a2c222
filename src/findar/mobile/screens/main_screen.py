"""
Main screen for FindAR.

The only screen of the app: camera preview, box overlay and detection banner.
"""

import logging

import numpy as np
from kivy.uix.floatlayout import FloatLayout

from ..widgets.box_overlay import BoxOverlay
from ..widgets.camera_preview import CameraPreview
from ..widgets.detection_label import DetectionLabel

logger = logging.getLogger(__name__)


class MainScreen(FloatLayout):
    """
    Main screen with camera preview and detection UI.

    Layout:
    ┌─────────────────────────────────────┐
    │          Sharp object 87%           │  <- banner, below top inset
    │                                     │
    │   ┌───────┐                         │
    │   │ box   │   LIVE CAMERA FEED      │
    │   └───────┘                         │
    │                                     │
    └─────────────────────────────────────┘

    Implements the overlay interface used by RecognitionHandler.
    """

    def __init__(
        self,
        box_color: tuple[float, float, float, float] = (1.0, 0.0, 0.0, 1.0),
        box_line_width: float = 2.0,
        **kwargs,
    ):
        super().__init__(**kwargs)

        # Stretch to the widget bounds so normalized boxes line up with the image
        self.camera_preview = CameraPreview(
            size_hint=(1, 1),
            pos_hint={"x": 0, "y": 0},
            allow_stretch=True,
            keep_ratio=False,
        )
        self.add_widget(self.camera_preview)

        self.box_overlay = BoxOverlay(
            box_color=box_color,
            line_width=box_line_width,
            size_hint=(1, 1),
            pos_hint={"x": 0, "y": 0},
        )
        self.add_widget(self.box_overlay)

        self.detection_label: DetectionLabel | None = None
        self.top_inset = 0.0

    def add_detection_label(self, height: float = 50, top_inset: float = 0.0) -> DetectionLabel:
        """
        Dock the banner to the top edge, below `top_inset` pixels.

        Returns:
            The banner widget.
        """
        if self.detection_label is not None:
            return self.detection_label

        self.top_inset = top_inset
        self.detection_label = DetectionLabel(height=height)
        self.add_widget(self.detection_label)
        self.bind(pos=self._layout_label, size=self._layout_label)
        self._layout_label()
        return self.detection_label

    def _layout_label(self, *args):
        label = self.detection_label
        if label is None:
            return
        label.width = self.width
        label.x = self.x
        label.top = self.top - self.top_inset

    def update_preview(self, frame: np.ndarray) -> None:
        """Show a camera frame. Safe to call from the capture thread."""
        self.camera_preview.update_frame(frame)

    # Overlay interface

    @property
    def surface_size(self) -> tuple[float, float]:
        return (self.box_overlay.width, self.box_overlay.height)

    def clear_boxes(self) -> None:
        self.box_overlay.clear()

    def add_box(self, rect: tuple[float, float, float, float]) -> None:
        self.box_overlay.add_box(rect)

    def set_text(self, text: str) -> None:
        if self.detection_label is None:
            logger.warning("Detection label is not set up")
            return
        self.detection_label.text = text
