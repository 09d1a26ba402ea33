"""Tests for capture backend selection."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import cv2
import pytest

from monolive.capture import CaptureOpenError, create_capture, open_capture
from monolive.capture.base import CaptureSource
from monolive.capture.device import DeviceIndexCapture
from monolive.capture.pipeline import NamedPipelineCapture
from monolive.config.settings import CaptureConfig
from monolive.domain.models import BackendKind


class TestCreateCapture:
    def test_default_is_device_index(self) -> None:
        capture = create_capture(CaptureConfig())
        assert isinstance(capture, DeviceIndexCapture)
        assert capture.is_open is False

    def test_named_pipeline(self) -> None:
        config = CaptureConfig(backend=BackendKind.NAMED_PIPELINE, pipeline_source="v4l2src")
        capture = create_capture(config)
        assert isinstance(capture, NamedPipelineCapture)
        assert capture.description.startswith("v4l2src")

    def test_capture_source_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            CaptureSource()  # type: ignore[abstract]

    def test_lazy_exports(self) -> None:
        import monolive.capture as capture_pkg

        assert capture_pkg.DeviceIndexCapture is DeviceIndexCapture
        with pytest.raises(AttributeError):
            capture_pkg.Nope  # noqa: B018


class TestOpenCapture:
    def test_open_failure_does_not_fall_back(self) -> None:
        cap = MagicMock()
        cap.isOpened.return_value = False
        with patch("monolive.capture.device.cv2.VideoCapture", return_value=cap) as ctor:
            with pytest.raises(CaptureOpenError):
                open_capture(CaptureConfig())
        ctor.assert_called_once_with(0, cv2.CAP_V4L2)

    def test_returns_open_source(self) -> None:
        cap = MagicMock()
        cap.isOpened.return_value = True
        cap.get.return_value = 0.0
        with patch("monolive.capture.device.cv2.VideoCapture", return_value=cap):
            capture = open_capture(CaptureConfig())
        assert capture.is_open is True
