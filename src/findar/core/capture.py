"""
Capture session for FindAR.

Owns the camera input and the background "video queue" thread that pulls
frames off the camera and hands them, one at a time, to a frame delegate.
"""

import logging
import threading
import time
from typing import Callable, Protocol

import numpy as np

from .errors import CameraUnavailableError

logger = logging.getLogger(__name__)

FrameDelegate = Callable[[np.ndarray], None]


class FrameSource(Protocol):
    """Anything the session can use as its camera input."""

    def open(self) -> bool:
        ...

    def read(self) -> np.ndarray | None:
        ...

    def release(self) -> None:
        ...


class CaptureSession:
    """
    Serial frame delivery from a camera to a delegate.

    The delegate is called on the session's own thread, synchronously, so at
    most one frame is in flight. Frames the camera produces while the
    delegate is busy are dropped by the camera buffer, not queued here.

    Usage:
        session = CaptureSession()
        session.add_input(Camera(config['camera']))
        session.add_output(on_frame)
        session.start_running()
    """

    def __init__(self, queue_label: str = "videoQueue", idle_delay: float = 0.01):
        """
        Initialize the capture session.

        Args:
            queue_label: Name of the frame delivery thread.
            idle_delay: Seconds to wait after a failed read before retrying.
        """
        self.queue_label = queue_label
        self.idle_delay = idle_delay

        self._input: FrameSource | None = None
        self._delegate: FrameDelegate | None = None
        self._thread: threading.Thread | None = None
        self._running = False

        # Statistics
        self.frames_delivered = 0
        self.read_failures = 0

    def add_input(self, source: FrameSource) -> None:
        """
        Open a camera and attach it as the session input.

        Raises:
            CameraUnavailableError: If the session already has an input or
                the camera cannot be opened.
        """
        if self._input is not None:
            raise CameraUnavailableError("Capture session already has a camera input")
        if not source.open():
            raise CameraUnavailableError("Unable to access camera.")
        self._input = source

    def add_output(self, delegate: FrameDelegate) -> None:
        """Attach the frame delegate."""
        self._delegate = delegate

    def start_running(self) -> None:
        """Start delivering frames on the background thread."""
        if self._running:
            logger.warning("CaptureSession already running")
            return
        if self._input is None:
            raise CameraUnavailableError("Capture session has no camera input")

        self._running = True
        self._thread = threading.Thread(
            target=self._run_loop,
            name=self.queue_label,
            daemon=True,
        )
        self._thread.start()
        logger.info(f"CaptureSession started on {self.queue_label}")

    def stop_running(self) -> None:
        """Stop frame delivery and release the camera."""
        if self._running:
            self._running = False
            if self._thread is not None and self._thread is not threading.current_thread():
                self._thread.join(timeout=2.0)
            self._thread = None
            logger.info(
                f"CaptureSession stopped: "
                f"delivered={self.frames_delivered}, "
                f"read_failures={self.read_failures}"
            )

        if self._input is not None:
            self._input.release()
            self._input = None

    def _run_loop(self) -> None:
        """Read frames and hand each one to the delegate."""
        logger.debug("CaptureSession loop started")

        while self._running:
            source = self._input
            if source is None:
                break

            frame = source.read()
            if frame is None:
                self.read_failures += 1
                time.sleep(self.idle_delay)
                continue

            if self._delegate is None:
                continue

            try:
                self._delegate(frame)
                self.frames_delivered += 1
            except Exception as e:
                logger.error(f"Frame delegate error: {e}")

        logger.debug("CaptureSession loop exited")

    @property
    def is_running(self) -> bool:
        """Check if frames are being delivered."""
        return self._running

    @property
    def has_input(self) -> bool:
        """Check if a camera input is attached."""
        return self._input is not None
