"""Core domain models for the monolive system.

These models represent the data flowing through the feed: frames pulled
from the camera, the normalization policy applied to each of them, and
the state and summary of a dispatch run.
"""

from __future__ import annotations

import enum

import numpy as np
from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class BackendKind(str, enum.Enum):
    """Which camera access path a capture session uses."""

    DEVICE_INDEX = "device_index"  # V4L2 device node, e.g. /dev/video0
    NAMED_PIPELINE = "named_pipeline"  # GStreamer graph (libcamera-only setups)


class LoopState(str, enum.Enum):
    """Lifecycle of the dispatch loop."""

    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"


class StopReason(str, enum.Enum):
    """Why the dispatch loop left the running state."""

    END_OF_STREAM = "end_of_stream"
    USER_STOP = "user_stop"
    ERROR = "error"


# ---------------------------------------------------------------------------
# Frame Models
# ---------------------------------------------------------------------------


class Frame(BaseModel):
    """A single image pulled from the camera with its capture timestamp.

    The image is either a 3-channel BGR array (OpenCV layout) or a
    1-channel intensity array once normalization has reduced it.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    image: np.ndarray = Field(description="Pixel buffer, HxW or HxWx3 uint8")
    timestamp: float = Field(ge=0.0, description="Seconds since the feed epoch")
    frame_number: int = Field(ge=0, description="Sequential frame counter")

    @property
    def width(self) -> int:
        return int(self.image.shape[1])

    @property
    def height(self) -> int:
        return int(self.image.shape[0])

    @property
    def channels(self) -> int:
        """1 for intensity images, otherwise the size of the last axis."""
        return 1 if self.image.ndim == 2 else int(self.image.shape[2])


class NormalizationPolicy(BaseModel):
    """Fixed (grayscale?, scale factor) pair applied to every frame of a run.

    The scale factor comes from the tracking engine's settings and is
    read once, after the engine has been initialized.
    """

    model_config = ConfigDict(frozen=True)

    force_grayscale: bool = Field(default=False)
    image_scale: float = Field(default=1.0, gt=0.0)


# ---------------------------------------------------------------------------
# Run Models
# ---------------------------------------------------------------------------


class RunSummary(BaseModel):
    """Outcome of a dispatch run, reported when the loop stops."""

    frames_dispatched: int = Field(default=0, ge=0)
    stop_reason: StopReason | None = Field(default=None)
    first_timestamp: float | None = Field(default=None)
    last_timestamp: float | None = Field(default=None)

    @property
    def elapsed(self) -> float:
        """Seconds between the first and last dispatched frame."""
        if self.first_timestamp is None or self.last_timestamp is None:
            return 0.0
        return self.last_timestamp - self.first_timestamp

    @property
    def mean_fps(self) -> float:
        if self.frames_dispatched < 2 or self.elapsed <= 0.0:
            return 0.0
        return (self.frames_dispatched - 1) / self.elapsed
