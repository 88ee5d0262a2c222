"""Widget modules for FindAR mobile UI."""

from .box_overlay import BoxOverlay
from .camera_preview import CameraPreview
from .detection_label import DetectionLabel

__all__ = ["BoxOverlay", "CameraPreview", "DetectionLabel"]
