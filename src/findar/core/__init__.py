"""Core components for FindAR."""

from .camera import Camera
from .capture import CaptureSession
from .config import Config
from .detector import DetectionRequest, ObjectDetector
from .errors import CameraUnavailableError, DetectionError, FatalSetupError, ModelLoadError
from .recognition import RecognitionHandler, select_most_confident
from .result import Classification, Detection, NormalizedRect

__all__ = [
    "Camera",
    "CaptureSession",
    "Config",
    "DetectionRequest",
    "ObjectDetector",
    "CameraUnavailableError",
    "DetectionError",
    "FatalSetupError",
    "ModelLoadError",
    "RecognitionHandler",
    "select_most_confident",
    "Classification",
    "Detection",
    "NormalizedRect",
]
