"""ORB-SLAM3 engine adapter.

Wraps the pybind11 ORB-SLAM3 wrapper (``python_wrapper.orb_slam3``),
which has to be built alongside ORB-SLAM3 and be importable.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from monolive.engine.base import EngineError, SensorMode, TrackingEngine

logger = logging.getLogger(__name__)


def _import_orbslam3() -> type:
    try:
        from python_wrapper.orb_slam3 import ORB_SLAM3  # type: ignore
    except ImportError as exc:
        raise EngineError(
            "Failed to import the ORB-SLAM3 python wrapper. Build ORB_SLAM3_pybind "
            f"and make sure python_wrapper is importable. Import error: {exc}",
            engine="orbslam3",
        ) from exc
    return ORB_SLAM3


class ORBSlam3Engine(TrackingEngine):
    """Monocular ORB-SLAM3 system.

    Args:
        vocabulary_path: ORB vocabulary (ORBvoc.txt).
        settings_path: Camera/ORB settings YAML.
        mode: Sensor mode; only monocular is used by the feed.
        use_viewer: Start the Pangolin map viewer.
        system_factory: Callable building the ORB-SLAM3 system. Defaults
            to the wrapper's ORB_SLAM3 class.
    """

    name = "orbslam3"

    def __init__(
        self,
        vocabulary_path: Path | str,
        settings_path: Path | str,
        mode: SensorMode = SensorMode.MONOCULAR,
        use_viewer: bool = True,
        system_factory: type | None = None,
    ) -> None:
        super().__init__(vocabulary_path, settings_path, mode, use_viewer)
        for label, path in (("vocabulary", self._vocabulary_path), ("settings", self._settings_path)):
            if not path.is_file():
                raise EngineError(f"ORB-SLAM3 {label} file not found: {path}", engine=self.name)

        factory = system_factory or _import_orbslam3()
        logger.info(
            "Initializing ORB-SLAM3 (%s, viewer=%s) with %s",
            mode.value, use_viewer, self._settings_path,
        )
        try:
            self._slam = factory(
                str(self._vocabulary_path), str(self._settings_path), mode.value, use_viewer,
            )
        except Exception as exc:
            raise EngineError(f"ORB-SLAM3 initialization failed: {exc}", engine=self.name) from exc

    def get_image_scale(self) -> float:
        get_scale = getattr(self._slam, "GetImageScale", None)
        if not callable(get_scale):
            logger.debug("ORB-SLAM3 wrapper has no GetImageScale, assuming 1.0")
            return 1.0
        scale = float(get_scale())
        if scale <= 0.0:
            raise EngineError(f"ORB-SLAM3 reported invalid image scale {scale}", engine=self.name)
        return scale

    def track(self, image: np.ndarray, timestamp: float) -> None:
        self._slam.TrackMonocular(image, float(timestamp))

    def shutdown(self) -> None:
        self._slam.Shutdown()

    def export_trajectory(self, path: Path | str) -> None:
        self._slam.SaveKeyFrameTrajectoryTUM(str(path))
