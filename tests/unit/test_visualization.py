"""Tests for still-image drawing helpers."""

import numpy as np

from findar.core.result import Detection, NormalizedRect
from findar.utils.visualization import draw_banner, draw_detections


class TestDrawDetections:
    def test_box_drawn_in_pixel_space(self):
        frame = np.zeros((100, 200, 3), dtype=np.uint8)
        detection = Detection(NormalizedRect(0.25, 0.5, 0.5, 0.25), 0.9)

        annotated = draw_detections(frame, [detection], color=(0, 0, 255), show_labels=False)

        # Left edge at x=50, rows 50..75
        assert tuple(annotated[60, 50]) == (0, 0, 255)
        # Interior untouched
        assert tuple(annotated[62, 100]) == (0, 0, 0)

    def test_input_not_modified(self):
        frame = np.zeros((100, 200, 3), dtype=np.uint8)
        draw_detections(frame, [Detection(NormalizedRect(0.1, 0.1, 0.5, 0.5), 0.9)])
        assert not frame.any()

    def test_no_detections(self):
        frame = np.full((50, 50, 3), 7, dtype=np.uint8)
        assert np.array_equal(draw_detections(frame, []), frame)


class TestDrawBanner:
    def test_top_strip_darkened(self):
        frame = np.full((200, 200, 3), 200, dtype=np.uint8)
        annotated = draw_banner(frame, "", height=50, opacity=0.7)

        assert annotated[10, 10, 0] == 60
        assert annotated[150, 10, 0] == 200

    def test_text_drawn(self):
        frame = np.zeros((200, 400, 3), dtype=np.uint8)
        annotated = draw_banner(frame, "Sharp object 90%")
        assert annotated[:50].max() == 255
