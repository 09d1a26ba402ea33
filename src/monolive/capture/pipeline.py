"""Named-pipeline capture backend using OpenCV's GStreamer API.

For cameras that are only exposed through libcamera (no raw device
node), frames come from a GStreamer graph that converts them to the BGR
layout the tracking engine expects and hands them to an appsink.
"""

from __future__ import annotations

import logging

import cv2

from monolive.capture.base import CaptureOpenError, CaptureSource
from monolive.domain.models import BackendKind

logger = logging.getLogger(__name__)


def build_pipeline_description(
    source: str = "libcamerasrc",
    width: int = 640,
    height: int = 480,
    fps: int = 30,
) -> str:
    """Render the capture graph: source -> RGB caps -> BGR conversion -> appsink."""
    return (
        f"{source} ! video/x-raw,format=RGB,width={width},height={height},framerate={fps}/1 "
        "! videoconvert ! video/x-raw,format=BGR ! appsink drop=1"
    )


class NamedPipelineCapture(CaptureSource):
    """Opens a fixed GStreamer capture graph."""

    kind = BackendKind.NAMED_PIPELINE

    def __init__(
        self,
        source: str = "libcamerasrc",
        width: int = 640,
        height: int = 480,
        fps: int = 30,
    ) -> None:
        super().__init__()
        self._description = build_pipeline_description(source, width, height, fps)

    @property
    def description(self) -> str:
        return self._description

    @property
    def name(self) -> str:
        return "gstreamer"

    def open(self) -> None:
        """Open the GStreamer pipeline."""
        logger.debug("Opening GStreamer pipeline: %s", self._description)
        cap = cv2.VideoCapture(self._description, cv2.CAP_GSTREAMER)
        if not cap.isOpened():
            cap.release()
            raise CaptureOpenError(
                "Could not open GStreamer pipeline. Check that OpenCV was built with "
                "GStreamer support, or retry without --gstreamer to use the V4L2 device.",
                backend=self.name,
            )
        self._cap = cap
        self._is_open = True
        actual_w, actual_h = self.frame_size()
        logger.info("Opened %s pipeline (%dx%d)", self.name, actual_w, actual_h)
