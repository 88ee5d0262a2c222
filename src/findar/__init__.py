"""
FindAR - Live Object Finder

Real-time camera app that detects objects in the live feed, draws their
bounding boxes and sounds an alert when a sharp object is spotted.
"""

__version__ = "0.1.0"
__author__ = "FindAR Team"

from .core.detector import ObjectDetector
from .core.recognition import RecognitionHandler
from .core.result import Detection

__all__ = ["ObjectDetector", "RecognitionHandler", "Detection", "__version__"]
