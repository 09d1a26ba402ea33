"""Tests for the V4L2 device-index capture backend."""

from __future__ import annotations

from unittest.mock import MagicMock, call, patch

import cv2
import numpy as np
import pytest

from monolive.capture.base import CaptureError, CaptureOpenError
from monolive.capture.device import DeviceIndexCapture
from monolive.domain.models import BackendKind


def _fake_cap(opened: bool = True, size: tuple[int, int] = (640, 480)) -> MagicMock:
    cap = MagicMock()
    cap.isOpened.return_value = opened
    props = {
        cv2.CAP_PROP_FRAME_WIDTH: float(size[0]),
        cv2.CAP_PROP_FRAME_HEIGHT: float(size[1]),
        cv2.CAP_PROP_FPS: 30.0,
    }
    cap.get.side_effect = lambda prop: props.get(prop, 0.0)
    return cap


class TestDeviceIndexCaptureInit:
    def test_defaults(self) -> None:
        capture = DeviceIndexCapture()
        assert capture._device_index == 0
        assert (capture._width, capture._height, capture._fps) == (640, 480, 30)
        assert capture.kind is BackendKind.DEVICE_INDEX
        assert capture.is_open is False
        assert capture.name == "v4l2:0"


class TestDeviceIndexCaptureOpen:
    def test_opens_with_v4l2_and_requests_mode(self) -> None:
        cap = _fake_cap()
        with patch("monolive.capture.device.cv2.VideoCapture", return_value=cap) as ctor:
            capture = DeviceIndexCapture()
            capture.open()
        ctor.assert_called_once_with(0, cv2.CAP_V4L2)
        cap.set.assert_has_calls(
            [
                call(cv2.CAP_PROP_FRAME_WIDTH, 640),
                call(cv2.CAP_PROP_FRAME_HEIGHT, 480),
                call(cv2.CAP_PROP_FPS, 30),
            ]
        )
        assert capture.is_open is True

    def test_nearest_mode_is_not_an_error(self) -> None:
        cap = _fake_cap(size=(800, 600))
        with patch("monolive.capture.device.cv2.VideoCapture", return_value=cap):
            capture = DeviceIndexCapture()
            capture.open()
        assert capture.is_open is True
        assert capture.frame_size() == (800, 600)

    def test_open_failure_raises_with_hint(self) -> None:
        cap = _fake_cap(opened=False)
        with patch("monolive.capture.device.cv2.VideoCapture", return_value=cap):
            capture = DeviceIndexCapture(device_index=2)
            with pytest.raises(CaptureOpenError, match="--gstreamer") as exc_info:
                capture.open()
        assert exc_info.value.backend == "v4l2:2"
        assert capture.is_open is False
        cap.release.assert_called_once()


class TestDeviceIndexCaptureRead:
    def test_read_returns_frame(self) -> None:
        cap = _fake_cap()
        image = np.zeros((480, 640, 3), dtype=np.uint8)
        cap.read.return_value = (True, image)
        with patch("monolive.capture.device.cv2.VideoCapture", return_value=cap):
            with DeviceIndexCapture() as capture:
                assert capture.read_frame() is image

    @pytest.mark.parametrize(
        "result",
        [(False, None), (True, None), (True, np.zeros((0, 0, 3), dtype=np.uint8))],
    )
    def test_failed_or_empty_read_is_end_of_stream(self, result: tuple) -> None:
        cap = _fake_cap()
        cap.read.return_value = result
        with patch("monolive.capture.device.cv2.VideoCapture", return_value=cap):
            with DeviceIndexCapture() as capture:
                assert capture.read_frame() is None

    def test_read_when_closed_raises(self) -> None:
        with pytest.raises(CaptureError):
            DeviceIndexCapture().read_frame()


class TestDeviceIndexCaptureClose:
    def test_context_manager_releases(self) -> None:
        cap = _fake_cap()
        with patch("monolive.capture.device.cv2.VideoCapture", return_value=cap):
            with DeviceIndexCapture() as capture:
                pass
        cap.release.assert_called_once()
        assert capture.is_open is False

    def test_close_is_idempotent(self) -> None:
        cap = _fake_cap()
        with patch("monolive.capture.device.cv2.VideoCapture", return_value=cap):
            capture = DeviceIndexCapture()
            capture.open()
        capture.close()
        capture.close()
        cap.release.assert_called_once()
