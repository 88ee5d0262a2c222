"""
Unit tests for per-frame recognition handling.
"""

import pytest

from findar.core.recognition import (
    LabelThrottle,
    RecognitionHandler,
    format_detection_text,
    select_most_confident,
)
from findar.core.result import Detection, NormalizedRect


class TestSelectMostConfident:
    """Tests for picking the detection shown in the banner."""

    def test_highest_confidence_wins(self, detection_factory):
        detections = [
            detection_factory("Bottle", 0.9),
            detection_factory("Cup", 0.4),
            detection_factory("Sharp object", 0.99),
        ]
        assert select_most_confident(detections).confidence == 0.99
        assert select_most_confident(detections).top_label.identifier == "Sharp object"

    def test_tie_goes_to_first(self, detection_factory):
        first = detection_factory("Bottle", 0.8)
        second = detection_factory("Cup", 0.8)
        assert select_most_confident([first, second]) is first

    def test_empty(self):
        assert select_most_confident([]) is None


class TestFormatDetectionText:
    @pytest.mark.parametrize(
        "confidence,expected",
        [
            (0.99, "Bottle 99%"),
            (0.875, "Bottle 87%"),
            (1.0, "Bottle 100%"),
            (0.0, "Bottle 0%"),
        ],
    )
    def test_percentage_is_truncated(self, confidence, expected):
        assert format_detection_text("Bottle", confidence) == expected


class TestLabelThrottle:
    def test_first_label_always_updates(self):
        throttle = LabelThrottle(1.0, start_time=10.0)
        assert throttle.should_update("Bottle", 10.0)

    def test_same_label_within_interval_is_held(self):
        throttle = LabelThrottle(1.0)
        throttle.record("Bottle", 10.0)
        assert not throttle.should_update("Bottle", 10.5)
        assert throttle.should_update("Bottle", 11.0)

    def test_label_change_bypasses_interval(self):
        throttle = LabelThrottle(1.0)
        throttle.record("Bottle", 10.0)
        assert throttle.should_update("Cup", 10.1)


class TestRecognitionHandler:
    """Tests for boxes, banner throttling and the alert."""

    @pytest.fixture
    def handler(self, overlay, alert, clock):
        return RecognitionHandler(overlay, alert, clock=clock)

    def test_box_count_matches_detections(self, handler, overlay, detection_factory):
        handler.handle([detection_factory() for _ in range(3)])
        assert len(overlay.boxes) == 3

        handler.handle([detection_factory()])
        assert len(overlay.boxes) == 1

    def test_empty_frame_clears_boxes_and_keeps_text(
        self, handler, overlay, detection_factory
    ):
        handler.handle([detection_factory("Bottle", 0.9)])
        assert handler.handle([]) is None
        assert overlay.boxes == []
        assert overlay.text == "Bottle 90%"

    def test_boxes_converted_to_surface_pixels(self, handler, overlay):
        detection = Detection(NormalizedRect(0.25, 0.5, 0.5, 0.25), 0.7)
        handler.handle([detection])
        assert overlay.boxes == [(100.0, 400.0, 200.0, 200.0)]

    def test_selected_label_is_most_confident(self, handler, overlay, detection_factory):
        handler.handle(
            [
                detection_factory("Bottle", 0.9),
                detection_factory("Cup", 0.4),
                detection_factory("Phone", 0.99),
            ]
        )
        assert overlay.text == "Phone 99%"

    def test_same_label_throttled_then_refreshed(
        self, handler, overlay, clock, detection_factory
    ):
        handler.handle([detection_factory("Sharp object", 0.9)])
        assert overlay.text == "Sharp object 90%"

        clock.advance(0.5)
        assert handler.handle([detection_factory("Sharp object", 0.8)]) is None
        assert overlay.text == "Sharp object 90%"

        clock.advance(0.6)
        assert handler.handle([detection_factory("Sharp object", 0.8)]) == "Sharp object 80%"
        assert overlay.text == "Sharp object 80%"

    def test_label_change_updates_immediately(
        self, handler, overlay, clock, detection_factory
    ):
        handler.handle([detection_factory("Sharp object", 0.9)])
        clock.advance(0.1)
        handler.handle([detection_factory("Bottle", 0.7)])
        assert overlay.text == "Bottle 70%"

    def test_boxes_drawn_even_when_text_throttled(
        self, handler, overlay, clock, detection_factory
    ):
        handler.handle([detection_factory("Bottle", 0.9)])
        clock.advance(0.2)
        handler.handle([detection_factory("Bottle", 0.9), detection_factory("Bottle", 0.6)])
        assert overlay.text_updates == 1
        assert len(overlay.boxes) == 2
        assert overlay.clear_count == 2

    def test_alert_plays_for_sharp_object(self, handler, alert, detection_factory):
        handler.handle([detection_factory("Sharp object", 0.9)])
        assert alert.play_count == 1

    def test_alert_silent_for_other_labels(self, handler, alert, clock, detection_factory):
        handler.handle([detection_factory("Bottle", 0.9)])
        clock.advance(2.0)
        handler.handle([detection_factory("Bottle", 0.9), detection_factory("Sharp object", 0.5)])
        assert alert.play_count == 0

    def test_alert_follows_banner_refresh(self, handler, alert, clock, detection_factory):
        handler.handle([detection_factory("Sharp object", 0.9)])
        clock.advance(0.5)
        handler.handle([detection_factory("Sharp object", 0.9)])
        assert alert.play_count == 1

        clock.advance(0.6)
        handler.handle([detection_factory("Sharp object", 0.9)])
        assert alert.play_count == 2

    def test_failing_alert_keeps_banner_and_throttle(self, overlay, clock, detection_factory, caplog):
        class BrokenAlert:
            def play(self):
                raise RuntimeError("audio device lost")

        handler = RecognitionHandler(overlay, BrokenAlert(), clock=clock)
        with caplog.at_level("ERROR", logger="findar.core.recognition"):
            text = handler.handle([detection_factory("Sharp object", 0.9)])

        assert text == "Sharp object 90%"
        assert overlay.text == "Sharp object 90%"
        assert handler.throttle.last_label == "Sharp object"
        assert handler.throttle.last_update_time == clock.now
        assert "Failed to play alert" in caplog.text

        clock.advance(0.2)
        assert handler.handle([detection_factory("Sharp object", 0.9)]) is None

    def test_missing_alert_is_tolerated(self, overlay, clock, detection_factory):
        handler = RecognitionHandler(overlay, alert=None, clock=clock)
        assert handler.handle([detection_factory("Sharp object", 0.9)]) == "Sharp object 90%"

    def test_unlabelled_detection_shows_unknown(self, handler, overlay):
        handler.handle([Detection(NormalizedRect(0.1, 0.1, 0.1, 0.1), 0.6)])
        assert overlay.text == "Unknown 0%"

    def test_custom_alert_label(self, overlay, alert, clock, detection_factory):
        handler = RecognitionHandler(overlay, alert, alert_label="Keys", clock=clock)
        handler.handle([detection_factory("Keys", 0.9)])
        assert alert.play_count == 1
