"""
Detection result data structures.
"""

from dataclasses import dataclass, field
from typing import Any

UNKNOWN_LABEL = "Unknown"


@dataclass(frozen=True)
class Classification:
    """A single class label with its score."""

    identifier: str
    confidence: float


@dataclass(frozen=True)
class NormalizedRect:
    """
    Bounding box relative to the frame size.

    All values are in the [0, 1] range with the origin at the top-left
    corner of the image.
    """

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_corners(cls, x1: float, y1: float, x2: float, y2: float) -> "NormalizedRect":
        """Build a rect from (x1, y1, x2, y2) corner coordinates."""
        return cls(x=x1, y=y1, width=x2 - x1, height=y2 - y1)


@dataclass
class Detection:
    """
    One recognized object in a frame.

    Attributes:
        bounding_box: Normalized location of the object
        confidence: Detection confidence from 0.0 to 1.0
        labels: Candidate classifications, best first
    """

    bounding_box: NormalizedRect
    confidence: float
    labels: list[Classification] = field(default_factory=list)

    @property
    def top_label(self) -> Classification:
        """Best classification, or an 'Unknown' placeholder with zero confidence."""
        if self.labels:
            return self.labels[0]
        return Classification(UNKNOWN_LABEL, 0.0)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        label = self.top_label
        return {
            "label": label.identifier,
            "confidence": round(self.confidence, 3),
            "bounding_box": [
                round(self.bounding_box.x, 4),
                round(self.bounding_box.y, 4),
                round(self.bounding_box.width, 4),
                round(self.bounding_box.height, 4),
            ],
        }


def image_rect_for_normalized_rect(
    rect: NormalizedRect, width: int, height: int
) -> tuple[float, float, float, float]:
    """
    Project a normalized rect into pixel space.

    Args:
        rect: Normalized bounding box
        width: Target surface width in pixels (truncated to int)
        height: Target surface height in pixels (truncated to int)

    Returns:
        (x, y, w, h) in pixels, origin top-left
    """
    w = int(width)
    h = int(height)
    return (rect.x * w, rect.y * h, rect.width * w, rect.height * h)
