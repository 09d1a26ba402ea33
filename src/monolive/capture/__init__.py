"""Capture backend selection for monolive.

Two mutually exclusive camera access paths are supported: a V4L2 device
index and a GStreamer pipeline. ``open_capture`` picks one from the
configuration and returns it already open.

Public API:
    CaptureSource -- Abstract base class
    CaptureError, CaptureOpenError -- Capture failures
    open_capture -- Backend selector
    DeviceIndexCapture, NamedPipelineCapture -- Concrete backends
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from monolive.capture.base import CaptureError, CaptureOpenError, CaptureSource
from monolive.domain.models import BackendKind

if TYPE_CHECKING:
    from monolive.config.settings import CaptureConfig

__all__ = [
    "CaptureSource",
    "CaptureError",
    "CaptureOpenError",
    "DeviceIndexCapture",
    "NamedPipelineCapture",
    "create_capture",
    "open_capture",
]


def create_capture(config: CaptureConfig) -> CaptureSource:
    """Build (without opening) the capture source selected by ``config.backend``."""
    if config.backend == BackendKind.NAMED_PIPELINE:
        from monolive.capture.pipeline import NamedPipelineCapture
        return NamedPipelineCapture(
            source=config.pipeline_source,
            width=config.width,
            height=config.height,
            fps=config.fps,
        )
    from monolive.capture.device import DeviceIndexCapture
    return DeviceIndexCapture(
        device_index=config.device_index,
        width=config.width,
        height=config.height,
        fps=config.fps,
    )


def open_capture(config: CaptureConfig) -> CaptureSource:
    """Build and open the selected capture source.

    Raises:
        CaptureOpenError: If the backend cannot be opened. There is no
            fallback to the other backend.
    """
    capture = create_capture(config)
    capture.open()
    return capture


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations."""
    if name == "DeviceIndexCapture":
        from monolive.capture.device import DeviceIndexCapture
        return DeviceIndexCapture
    if name == "NamedPipelineCapture":
        from monolive.capture.pipeline import NamedPipelineCapture
        return NamedPipelineCapture
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
