"""Monotonic frame timestamps.

Timestamps are seconds since an epoch taken once when the feed starts,
read from a monotonic clock so wall-clock adjustments (NTP on a Pi
without an RTC) cannot move them.
"""

from __future__ import annotations

import time
from typing import Callable

from pydantic import BaseModel, ConfigDict


class Epoch(BaseModel):
    """Origin reading of the time source."""

    model_config = ConfigDict(frozen=True)

    origin: float


class FrameClock:
    """Converts "now" into seconds since the epoch, never going backward.

    Args:
        time_source: Monotonic time function in seconds. Injectable so
            the dispatch loop can be driven by a fake clock in tests.
    """

    def __init__(self, time_source: Callable[[], float] = time.monotonic) -> None:
        self._time_source = time_source
        self._epoch: Epoch | None = None
        self._last: float = 0.0

    @property
    def epoch(self) -> Epoch | None:
        return self._epoch

    def start(self) -> Epoch:
        """Capture the epoch. Restarting resets the timeline to zero."""
        self._epoch = Epoch(origin=self._time_source())
        self._last = 0.0
        return self._epoch

    def now(self) -> float:
        """Seconds elapsed since the epoch.

        Raises:
            RuntimeError: If start() has not been called.
        """
        if self._epoch is None:
            raise RuntimeError("FrameClock.now() called before start()")
        elapsed = self._time_source() - self._epoch.origin
        # Clamp so a misbehaving source cannot produce a decreasing stamp.
        if elapsed < self._last:
            elapsed = self._last
        self._last = elapsed
        return elapsed
