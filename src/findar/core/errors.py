"""
Exception types for FindAR.

Setup failures for the camera or the detection model are fatal and must stop
initialization. Audio problems never raise; they only disable the alert.
"""


class FindARError(Exception):
    """Base class for FindAR errors."""


class FatalSetupError(FindARError):
    """A required resource could not be acquired at startup."""


class CameraUnavailableError(FatalSetupError):
    """No camera device could be opened."""


class ModelLoadError(FatalSetupError):
    """The bundled detection model is missing or cannot be loaded."""


class DetectionError(FindARError):
    """Inference failed for a single frame."""
