"""Abstract base class for live capture sources.

Every camera access path (V4L2 device node, GStreamer pipeline) conforms
to this interface, so the dispatch loop reads frames the same way
regardless of which backend was selected at startup.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import cv2
import numpy as np

from monolive.domain.models import BackendKind

logger = logging.getLogger(__name__)


class CaptureSource(ABC):
    """Abstract interface for reading frames from a live video source.

    Implementations only differ in how the underlying ``cv2.VideoCapture``
    is opened. Reading and releasing are shared.

    Example usage::

        with DeviceIndexCapture(device_index=0) as capture:
            while (image := capture.read_frame()) is not None:
                process(image)
    """

    kind: BackendKind

    def __init__(self) -> None:
        self._cap: cv2.VideoCapture | None = None
        self._is_open: bool = False

    @property
    def is_open(self) -> bool:
        """Whether the capture device is currently open and ready."""
        return self._is_open

    @property
    def name(self) -> str:
        """Human-readable identifier used in log and error messages."""
        return self.kind.value

    @abstractmethod
    def open(self) -> None:
        """Open the video source.

        Raises:
            CaptureOpenError: If the backend cannot be opened. This is
                fatal for the run; callers must not retry or fall back.
        """
        ...

    def close(self) -> None:
        """Release the video source. Safe to call multiple times."""
        if self._cap is not None:
            self._cap.release()
            logger.info("Released capture source %s", self.name)
        self._cap = None
        self._is_open = False

    def read_frame(self) -> np.ndarray | None:
        """Block until the next frame is available and return it.

        Returns:
            The BGR image, or None when the read failed or produced an
            empty image. None means end of stream: the caller stops.

        Raises:
            CaptureError: If the source is not open.
        """
        if not self._is_open or self._cap is None:
            raise CaptureError(f"Capture source {self.name} is not open", backend=self.name)
        ok, frame = self._cap.read()
        if not ok or frame is None or frame.size == 0:
            return None
        return frame

    def frame_size(self) -> tuple[int, int]:
        """(width, height) currently reported by the backend."""
        if self._cap is None:
            return 0, 0
        w = int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        h = int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        return w, h

    def __enter__(self) -> CaptureSource:
        """Context manager entry -- opens the video source."""
        self.open()
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        """Context manager exit -- releases the video source."""
        self.close()


class CaptureError(Exception):
    """Raised when frame capture fails."""

    def __init__(self, message: str, backend: str = "") -> None:
        super().__init__(message)
        self.backend = backend


class CaptureOpenError(CaptureError):
    """Raised when the selected capture backend cannot be opened."""
