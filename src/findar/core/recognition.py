"""
Per-frame recognition handling.

Turns the detections of one frame into overlay boxes, a throttled text
banner and the alert sound. Everything here runs on the UI thread; the
overlay and alert are passed in so the logic does not depend on Kivy.
"""

import logging
import time
from typing import Callable, Protocol, runtime_checkable

from .result import Detection, image_rect_for_normalized_rect

logger = logging.getLogger(__name__)

ALERT_LABEL = "Sharp object"
UPDATE_INTERVAL = 1.0


@runtime_checkable
class RecognitionOverlay(Protocol):
    """Surface that shows boxes and the banner text."""

    @property
    def surface_size(self) -> tuple[float, float]:
        """Size of the preview surface as (width, height) in pixels."""
        ...

    def clear_boxes(self) -> None:
        ...

    def add_box(self, rect: tuple[float, float, float, float]) -> None:
        """Draw one box given as (x, y, w, h) pixels, origin top-left."""
        ...

    def set_text(self, text: str) -> None:
        ...


class Alert(Protocol):
    def play(self) -> None:
        ...


def select_most_confident(detections: list[Detection]) -> Detection | None:
    """
    Return the detection with the highest confidence.

    Ties go to the detection that comes first. Returns None for an empty list.
    """
    best = None
    for detection in detections:
        if best is None or detection.confidence > best.confidence:
            best = detection
    return best


def format_detection_text(identifier: str, confidence: float) -> str:
    """Banner text, e.g. 'Sharp object 87%'. The percentage is truncated."""
    return f"{identifier} {int(confidence * 100)}%"


class LabelThrottle:
    """
    Rate limit for banner updates.

    An update is allowed when at least `interval` seconds have passed since
    the last one, or when the label differs from the last recorded label.
    """

    def __init__(self, interval: float = UPDATE_INTERVAL, start_time: float = 0.0):
        self.interval = interval
        self.last_update_time = start_time
        self.last_label: str | None = None

    def should_update(self, label: str, now: float) -> bool:
        return now - self.last_update_time >= self.interval or label != self.last_label

    def record(self, label: str, now: float) -> None:
        self.last_update_time = now
        self.last_label = label


class RecognitionHandler:
    """
    Applies one frame's detections to the overlay.

    Boxes are redrawn on every frame; the banner text follows the throttle.
    When the banner is refreshed with the alert label, the alert is played.
    """

    def __init__(
        self,
        overlay: RecognitionOverlay,
        alert: Alert | None = None,
        alert_label: str = ALERT_LABEL,
        update_interval: float = UPDATE_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.overlay = overlay
        self.alert = alert
        self.alert_label = alert_label
        self.clock = clock
        self.throttle = LabelThrottle(update_interval, start_time=clock())

    def handle(self, detections: list[Detection]) -> str | None:
        """
        Process the detections of one frame.

        Returns:
            The new banner text if it was replaced, otherwise None.
        """
        self.draw_boxes(detections)

        most_confident = select_most_confident(detections)
        if most_confident is None:
            return None

        label = most_confident.top_label
        now = self.clock()
        if not self.throttle.should_update(label.identifier, now):
            return None

        text = format_detection_text(label.identifier, label.confidence)
        self.throttle.record(label.identifier, now)
        self.overlay.set_text(text)

        if label.identifier == self.alert_label and self.alert is not None:
            logger.info(f"Alert: {text}")
            try:
                self.alert.play()
            except Exception as e:
                logger.error(f"Failed to play alert: {e}")

        return text

    def draw_boxes(self, detections: list[Detection]) -> None:
        """Replace all overlay boxes with one box per detection."""
        self.overlay.clear_boxes()
        width, height = self.overlay.surface_size
        for detection in detections:
            self.overlay.add_box(
                image_rect_for_normalized_rect(detection.bounding_box, width, height)
            )
