"""
Frame pipeline glue between the capture thread and the UI thread.

The capture session calls `FramePipeline.capture_output` for each frame on
its own thread. Results are passed to `dispatch`, which must run the given
callable on the UI thread in submission order (the Kivy app wraps
`Clock.schedule_once`).
"""

import logging
import sys
from pathlib import Path
from typing import Any, Callable

import numpy as np

from .capture import CaptureSession, FrameSource
from .detector import DetectionRequest, ObjectDetector, perform_requests
from .errors import DetectionError, FatalSetupError
from .result import Detection

logger = logging.getLogger(__name__)

Dispatch = Callable[[Callable[[], None]], None]


class FramePipeline:
    """
    Per-frame callback: preview, inference, and handoff of the results.

    Usage:
        pipeline = FramePipeline(dispatch=run_on_ui_thread, preview=screen.update_preview)
        session = open_capture_session(camera, pipeline.capture_output)
        pipeline.load_model(config['model'], base_dir=project_root)
        pipeline.on_results = handler.handle
    """

    def __init__(
        self,
        dispatch: Dispatch,
        preview: Callable[[np.ndarray], None] | None = None,
        on_results: Callable[[list[Detection]], Any] | None = None,
    ):
        self.dispatch = dispatch
        self.preview = preview
        self.on_results = on_results
        self.requests: list[DetectionRequest] = []

    def load_model(
        self,
        model_config: dict[str, Any],
        base_dir: Path | None = None,
        detector_factory: Callable[..., ObjectDetector] = ObjectDetector,
    ) -> None:
        """
        Load the detector and install it as the single request.

        Raises:
            ModelLoadError: If the model is missing or unloadable.
        """
        self.use_detector(detector_factory(model_config, base_dir=base_dir))

    def use_detector(self, detector: ObjectDetector) -> None:
        self.requests = [DetectionRequest(detector, completion=self.deliver)]

    def capture_output(self, frame: np.ndarray) -> None:
        """Handle one camera frame (called on the capture thread)."""
        if self.preview is not None:
            self.preview(frame)

        try:
            perform_requests(frame, self.requests)
        except DetectionError as e:
            logger.error(f"Failed to perform image request: {e}")

    def deliver(self, detections: list[Detection]) -> None:
        """Queue the results for the UI thread."""
        self.dispatch(lambda: self.handle(detections))

    def handle(self, detections: list[Detection]) -> None:
        """Apply results (called on the UI thread)."""
        if self.on_results is None:
            logger.warning("Recognition handler is not set up")
            return
        self.on_results(detections)


def open_capture_session(camera: FrameSource, on_frame: Callable[[np.ndarray], None]) -> CaptureSession:
    """
    Create a session with `camera` as input and `on_frame` as delegate.

    Raises:
        CameraUnavailableError: If the camera cannot be opened.
    """
    session = CaptureSession()
    session.add_input(camera)
    session.add_output(on_frame)
    return session


def run_or_exit(run: Callable[[], None], cleanup: Callable[[], None] | None = None) -> None:
    """
    Run the app; on a fatal setup error, log it, clean up and exit with status 1.
    """
    try:
        run()
    except FatalSetupError as e:
        logger.critical(f"FindAR cannot start: {e}")
        if cleanup is not None:
            cleanup()
        sys.exit(1)
