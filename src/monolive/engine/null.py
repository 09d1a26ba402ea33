"""Dry-run engine that accepts frames without tracking them.

Useful to check the camera and normalization path on a board where the
SLAM build is not available yet.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from monolive.engine.base import SensorMode, TrackingEngine

logger = logging.getLogger(__name__)


class NullEngine(TrackingEngine):
    """Counts dispatched frames and exports an empty trajectory."""

    name = "null"

    def __init__(
        self,
        vocabulary_path: Path | str,
        settings_path: Path | str,
        mode: SensorMode = SensorMode.MONOCULAR,
        use_viewer: bool = True,
        image_scale: float = 1.0,
    ) -> None:
        super().__init__(vocabulary_path, settings_path, mode, use_viewer)
        self._image_scale = image_scale
        self._frames_tracked = 0
        self._last_timestamp: float | None = None
        self._last_shape: tuple[int, ...] | None = None
        self._is_shut_down = False

    @property
    def frames_tracked(self) -> int:
        return self._frames_tracked

    @property
    def last_shape(self) -> tuple[int, ...] | None:
        return self._last_shape

    def get_image_scale(self) -> float:
        return self._image_scale

    def track(self, image: np.ndarray, timestamp: float) -> None:
        if self._is_shut_down:
            raise RuntimeError("NullEngine.track() called after shutdown()")
        if self._last_timestamp is not None and timestamp < self._last_timestamp:
            logger.warning(
                "Timestamp went backward: %.6f < %.6f", timestamp, self._last_timestamp,
            )
        self._frames_tracked += 1
        self._last_timestamp = timestamp
        self._last_shape = tuple(image.shape)

    def shutdown(self) -> None:
        self._is_shut_down = True
        logger.info("Null engine received %d frames", self._frames_tracked)

    def export_trajectory(self, path: Path | str) -> None:
        Path(path).write_text("")
