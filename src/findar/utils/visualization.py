"""
Visualization utilities for FindAR.

OpenCV drawing helpers used when running the detector on still images.
"""

import cv2
import numpy as np

from ..core.result import Detection, image_rect_for_normalized_rect


def draw_detections(
    frame: np.ndarray,
    detections: list[Detection],
    color: tuple[int, int, int] = (0, 0, 255),
    thickness: int = 2,
    show_labels: bool = True,
) -> np.ndarray:
    """
    Draw one rectangle per detection.

    Args:
        frame: BGR image
        detections: Detections with normalized boxes
        color: BGR box color
        thickness: Box line thickness
        show_labels: Whether to write the label above each box

    Returns:
        Annotated copy of the frame
    """
    annotated = frame.copy()
    height, width = annotated.shape[:2]

    for detection in detections:
        x, y, w, h = image_rect_for_normalized_rect(detection.bounding_box, width, height)
        top_left = (int(x), int(y))
        bottom_right = (int(x + w), int(y + h))
        cv2.rectangle(annotated, top_left, bottom_right, color, thickness)

        if show_labels:
            label = detection.top_label
            cv2.putText(
                annotated,
                f"{label.identifier}: {label.confidence:.2f}",
                (top_left[0], max(top_left[1] - 6, 12)),
                cv2.FONT_HERSHEY_SIMPLEX,
                0.5,
                color,
                1,
            )

    return annotated


def draw_banner(
    frame: np.ndarray,
    text: str,
    height: int = 50,
    opacity: float = 0.7,
) -> np.ndarray:
    """
    Draw the detection banner across the top of the frame.

    Args:
        frame: BGR image
        text: Banner text
        height: Banner height in pixels
        opacity: Background opacity

    Returns:
        Annotated copy of the frame
    """
    annotated = frame.copy()
    width = annotated.shape[1]
    height = min(height, annotated.shape[0])

    # Blend a black strip over the top edge
    strip = annotated[:height, :]
    annotated[:height, :] = cv2.addWeighted(np.zeros_like(strip), opacity, strip, 1 - opacity, 0)

    if text:
        text_size = cv2.getTextSize(text, cv2.FONT_HERSHEY_SIMPLEX, 0.8, 2)[0]
        origin = ((width - text_size[0]) // 2, (height + text_size[1]) // 2)
        cv2.putText(
            annotated,
            text,
            origin,
            cv2.FONT_HERSHEY_SIMPLEX,
            0.8,
            (255, 255, 255),
            2,
        )

    return annotated
