"""
Object detector for FindAR.

Runs a bundled SSD-style detection network through OpenCV's DNN module.
The network output is the usual [1, 1, N, 7] tensor whose rows are
(image_id, class_id, confidence, x1, y1, x2, y2) with corners already
normalized to the input frame.
"""

import logging
import time
from pathlib import Path
from typing import Any, Callable

import cv2
import numpy as np

from .errors import DetectionError, ModelLoadError
from .result import Classification, Detection, NormalizedRect

logger = logging.getLogger(__name__)


def load_labels(labels_path: Path) -> list[str]:
    """
    Load class names, one per line. Line N names class id N.

    Raises:
        ModelLoadError: If the file cannot be read.
    """
    try:
        with open(labels_path, encoding="utf-8") as f:
            return [line.strip() for line in f]
    except OSError as e:
        raise ModelLoadError(f"Can't load labels from {labels_path}: {e}") from e


class ObjectDetector:
    """
    Detection model wrapper.

    Usage:
        detector = ObjectDetector(config['model'], base_dir=project_root)
        detections = detector.detect(frame)
    """

    def __init__(self, config: dict[str, Any], base_dir: Path | None = None):
        """
        Load the detection model.

        Args:
            config: Model configuration dictionary with keys:
                - path: network weights (.pb, .onnx, .caffemodel, ...)
                - config: optional network description (.pbtxt, .prototxt)
                - labels: class names file
                - input_size: [width, height] of the network input
                - scale_factor: pixel scale applied by blobFromImage
                - mean: per-channel mean subtracted by blobFromImage
                - swap_rb: convert BGR frames to RGB
                - confidence_threshold: minimum score to keep a detection
            base_dir: Directory relative paths are resolved against.

        Raises:
            ModelLoadError: If the model or labels are missing or unloadable.
        """
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()

        model_path = config.get("path")
        if not model_path:
            raise ModelLoadError("No detection model configured")
        self.model_path = self._resolve(model_path)
        config_path = config.get("config")
        self.config_path = self._resolve(config_path) if config_path else None
        labels_path = config.get("labels")
        self.labels_path = self._resolve(labels_path) if labels_path else None

        self.input_size = tuple(config.get("input_size", [300, 300]))
        self.scale_factor = float(config.get("scale_factor", 1.0))
        self.mean = tuple(config.get("mean", [0, 0, 0]))
        self.swap_rb = bool(config.get("swap_rb", True))
        self.confidence_threshold = float(config.get("confidence_threshold", 0.5))

        self.class_names = load_labels(self.labels_path) if self.labels_path else []
        self.net = self._load_network()

        logger.info(
            f"Detection model loaded: {self.model_path.name} "
            f"({len(self.class_names)} classes, input={self.input_size})"
        )

    def _resolve(self, path: str | Path) -> Path:
        path = Path(path).expanduser()
        if not path.is_absolute():
            path = self.base_dir / path
        return path

    def _load_network(self) -> Any:
        """Read the network with OpenCV DNN."""
        if not self.model_path.exists():
            raise ModelLoadError(f"Can't find detection model: {self.model_path}")
        if self.config_path is not None and not self.config_path.exists():
            raise ModelLoadError(f"Can't find model config: {self.config_path}")

        try:
            net = cv2.dnn.readNet(
                str(self.model_path),
                str(self.config_path) if self.config_path else "",
            )
        except cv2.error as e:
            raise ModelLoadError(f"Can't load detection model {self.model_path}: {e}") from e

        if net is None or net.empty():
            raise ModelLoadError(f"Detection model is empty: {self.model_path}")
        return net

    def detect(self, frame: np.ndarray) -> list[Detection]:
        """
        Run the model on one BGR frame.

        Returns:
            Detections above the confidence threshold, in model output order.

        Raises:
            DetectionError: If inference fails.
        """
        if frame is None or frame.size == 0:
            raise DetectionError("Empty frame")

        start_time = time.perf_counter()
        try:
            blob = cv2.dnn.blobFromImage(
                frame,
                scalefactor=self.scale_factor,
                size=self.input_size,
                mean=self.mean,
                swapRB=self.swap_rb,
                crop=False,
            )
            self.net.setInput(blob)
            output = self.net.forward()
        except cv2.error as e:
            raise DetectionError(f"Inference failed: {e}") from e

        detections = self._postprocess(np.asarray(output))

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(f"Inference: {len(detections)} detections in {elapsed_ms:.1f}ms")
        return detections

    def _postprocess(self, output: np.ndarray) -> list[Detection]:
        """Convert raw SSD rows into Detection objects."""
        if output.size == 0:
            return []
        if output.shape[-1] != 7:
            raise DetectionError(f"Unexpected model output shape: {output.shape}")

        detections = []
        for row in output.reshape(-1, 7):
            confidence = float(row[2])
            if confidence < self.confidence_threshold:
                continue

            x1, y1, x2, y2 = (float(v) for v in np.clip(row[3:7], 0.0, 1.0))
            if x2 <= x1 or y2 <= y1:
                continue

            class_id = int(row[1])
            detections.append(
                Detection(
                    bounding_box=NormalizedRect.from_corners(x1, y1, x2, y2),
                    confidence=confidence,
                    labels=[Classification(self.get_class_name(class_id), confidence)],
                )
            )
        return detections

    def get_class_name(self, class_id: int) -> str:
        """Get class name for a given class ID."""
        if 0 <= class_id < len(self.class_names) and self.class_names[class_id]:
            return self.class_names[class_id]
        return f"class_{class_id}"


class DetectionRequest:
    """
    A configured inference request.

    Performing the request runs the detector on a frame and passes the
    results to the completion handler on the calling thread.
    """

    def __init__(
        self,
        detector: ObjectDetector,
        completion: Callable[[list[Detection]], None] | None = None,
    ):
        self.detector = detector
        self.completion = completion
        self.results: list[Detection] = []

    def perform(self, frame: np.ndarray) -> list[Detection]:
        self.results = self.detector.detect(frame)
        if self.completion is not None:
            self.completion(self.results)
        return self.results


def perform_requests(frame: np.ndarray, requests: list[DetectionRequest]) -> None:
    """Perform every request on the same frame, in order."""
    for request in requests:
        request.perform(frame)
