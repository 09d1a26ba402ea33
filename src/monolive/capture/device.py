"""Device-index capture backend using OpenCV's V4L2 API.

Used for USB cameras, or a Pi camera when /dev/videoN is available.
"""

from __future__ import annotations

import logging

import cv2

from monolive.capture.base import CaptureOpenError, CaptureSource
from monolive.domain.models import BackendKind

logger = logging.getLogger(__name__)


class DeviceIndexCapture(CaptureSource):
    """Opens a V4L2 device by index and requests a capture mode.

    The requested width, height and frame rate are best effort: the
    driver may pick the nearest supported mode, which is logged but not
    treated as an error.
    """

    kind = BackendKind.DEVICE_INDEX

    def __init__(
        self,
        device_index: int = 0,
        width: int = 640,
        height: int = 480,
        fps: int = 30,
    ) -> None:
        super().__init__()
        self._device_index = device_index
        self._width = width
        self._height = height
        self._fps = fps

    @property
    def name(self) -> str:
        return f"v4l2:{self._device_index}"

    def open(self) -> None:
        """Open the V4L2 device and request the configured mode."""
        cap = cv2.VideoCapture(self._device_index, cv2.CAP_V4L2)
        if not cap.isOpened():
            cap.release()
            raise CaptureOpenError(
                f"Could not open camera {self._device_index} with V4L2. "
                "If the camera is only reachable through libcamera, retry with --gstreamer.",
                backend=self.name,
            )
        # Ask for a common mode (camera may choose nearest)
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self._width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self._height)
        cap.set(cv2.CAP_PROP_FPS, self._fps)
        self._cap = cap
        self._is_open = True

        actual_w, actual_h = self.frame_size()
        actual_fps = cap.get(cv2.CAP_PROP_FPS)
        logger.info(
            "Opened %s (%dx%d @ %.1f fps)", self.name, actual_w, actual_h, actual_fps,
        )
        if (actual_w, actual_h) != (self._width, self._height):
            logger.warning(
                "Camera chose %dx%d instead of the requested %dx%d",
                actual_w, actual_h, self._width, self._height,
            )
