"""
Pytest fixtures for FindAR tests.

Provides common test fixtures including:
- Test configuration
- Synthetic frames and detections
- Fake overlay, alert and clock for the recognition handler
"""

import numpy as np
import pytest

from findar.core.result import Classification, Detection, NormalizedRect


@pytest.fixture
def test_config():
    """Test configuration dictionary."""
    return {
        "camera": {
            "source": 0,
            "backend": "CAP_ANY",
            "width": 640,
            "height": 480,
            "fps": 30,
            "buffer_size": 1,
        },
        "model": {
            "path": "models/detector.pb",
            "labels": "models/labels.txt",
            "input_size": [300, 300],
            "scale_factor": 1.0,
            "mean": [0, 0, 0],
            "swap_rb": True,
            "confidence_threshold": 0.5,
        },
        "recognition": {
            "alert_label": "Sharp object",
            "update_interval": 1.0,
        },
    }


@pytest.fixture
def sample_frame():
    """Synthetic 640x480 BGR frame."""
    frame = np.zeros((480, 640, 3), dtype=np.uint8)
    frame[100:200, 150:300] = (200, 200, 200)
    return frame


def make_detection(
    label: str = "Bottle",
    confidence: float = 0.9,
    box: tuple[float, float, float, float] = (0.1, 0.1, 0.2, 0.2),
) -> Detection:
    """Build a detection with a single label."""
    return Detection(
        bounding_box=NormalizedRect(*box),
        confidence=confidence,
        labels=[Classification(label, confidence)],
    )


@pytest.fixture
def detection_factory():
    return make_detection


class FakeOverlay:
    """Records what the recognition handler draws."""

    def __init__(self, width: float = 400, height: float = 800):
        self.width = width
        self.height = height
        self.boxes: list[tuple[float, float, float, float]] = []
        self.text = ""
        self.text_updates = 0
        self.clear_count = 0

    @property
    def surface_size(self):
        return (self.width, self.height)

    def clear_boxes(self):
        self.boxes = []
        self.clear_count += 1

    def add_box(self, rect):
        self.boxes.append(rect)

    def set_text(self, text):
        self.text = text
        self.text_updates += 1


class FakeAlert:
    def __init__(self):
        self.play_count = 0

    def play(self):
        self.play_count += 1


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def overlay():
    return FakeOverlay()


@pytest.fixture
def alert():
    return FakeAlert()


@pytest.fixture
def clock():
    return FakeClock()
