"""Tests for the ORB-SLAM3 adapter, using a stand-in system object."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import numpy as np
import pytest

from monolive.engine.base import EngineError, SensorMode
from monolive.engine.orbslam3 import ORBSlam3Engine


@pytest.fixture
def engine_files(tmp_path: Path) -> tuple[Path, Path]:
    vocab = tmp_path / "ORBvoc.txt"
    settings = tmp_path / "camera.yaml"
    vocab.write_text("vocab")
    settings.write_text("%YAML:1.0\n")
    return vocab, settings


class TestORBSlam3Init:
    def test_constructs_monocular_system(self, engine_files: tuple[Path, Path]) -> None:
        vocab, settings = engine_files
        factory = MagicMock()
        ORBSlam3Engine(vocab, settings, SensorMode.MONOCULAR, True, system_factory=factory)
        factory.assert_called_once_with(str(vocab), str(settings), "MONOCULAR", True)

    def test_missing_vocabulary(self, engine_files: tuple[Path, Path], tmp_path: Path) -> None:
        _, settings = engine_files
        with pytest.raises(EngineError, match="vocabulary"):
            ORBSlam3Engine(tmp_path / "missing.txt", settings, system_factory=MagicMock())

    def test_missing_settings(self, engine_files: tuple[Path, Path], tmp_path: Path) -> None:
        vocab, _ = engine_files
        with pytest.raises(EngineError, match="settings"):
            ORBSlam3Engine(vocab, tmp_path / "missing.yaml", system_factory=MagicMock())

    def test_construction_failure_is_engine_error(self, engine_files: tuple[Path, Path]) -> None:
        factory = MagicMock(side_effect=RuntimeError("bad yaml"))
        with pytest.raises(EngineError, match="bad yaml") as exc_info:
            ORBSlam3Engine(*engine_files, system_factory=factory)
        assert exc_info.value.engine == "orbslam3"

    def test_missing_binding_is_engine_error(self, engine_files: tuple[Path, Path]) -> None:
        with patch.dict("sys.modules", {"python_wrapper": None, "python_wrapper.orb_slam3": None}):
            with pytest.raises(EngineError, match="python wrapper"):
                ORBSlam3Engine(*engine_files)


class TestORBSlam3Calls:
    @pytest.fixture
    def system(self) -> MagicMock:
        return MagicMock()

    @pytest.fixture
    def engine(self, engine_files: tuple[Path, Path], system: MagicMock) -> ORBSlam3Engine:
        return ORBSlam3Engine(*engine_files, system_factory=MagicMock(return_value=system))

    def test_image_scale(self, engine: ORBSlam3Engine, system: MagicMock) -> None:
        system.GetImageScale.return_value = 0.5
        assert engine.get_image_scale() == 0.5

    def test_image_scale_defaults_when_unsupported(self, engine_files: tuple[Path, Path]) -> None:
        system = MagicMock(spec=["TrackMonocular", "Shutdown", "SaveKeyFrameTrajectoryTUM"])
        engine = ORBSlam3Engine(*engine_files, system_factory=MagicMock(return_value=system))
        assert engine.get_image_scale() == 1.0

    def test_invalid_image_scale(self, engine: ORBSlam3Engine, system: MagicMock) -> None:
        system.GetImageScale.return_value = 0.0
        with pytest.raises(EngineError):
            engine.get_image_scale()

    def test_track(self, engine: ORBSlam3Engine, system: MagicMock) -> None:
        image = np.zeros((480, 640), dtype=np.uint8)
        engine.track(image, 1.25)
        system.TrackMonocular.assert_called_once_with(image, 1.25)

    def test_shutdown_and_export(self, engine: ORBSlam3Engine, system: MagicMock) -> None:
        engine.shutdown()
        engine.export_trajectory(Path("KeyFrameTrajectory.txt"))
        system.Shutdown.assert_called_once_with()
        system.SaveKeyFrameTrajectoryTUM.assert_called_once_with("KeyFrameTrajectory.txt")
