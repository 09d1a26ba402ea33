"""Shared test fixtures for the monolive test suite.

Provides synthetic frames, a fake clock and a recording tracking engine.
The test doubles themselves live in ``doubles.py``.
"""

from __future__ import annotations

import numpy as np
import pytest

from doubles import FakeTimeSource, RecordingEngine
from monolive.clock import FrameClock
from monolive.domain.models import NormalizationPolicy


# ---------------------------------------------------------------------------
# Frame / Image Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def color_image() -> np.ndarray:
    """A 640x480 BGR image with random content."""
    rng = np.random.default_rng(seed=7)
    return rng.integers(0, 256, size=(480, 640, 3), dtype=np.uint8)


@pytest.fixture
def synthetic_frames(color_image: np.ndarray) -> list[np.ndarray]:
    """Three distinct 640x480 BGR frames."""
    return [np.roll(color_image, shift=i, axis=1) for i in range(3)]


@pytest.fixture
def fake_clock() -> FrameClock:
    return FrameClock(time_source=FakeTimeSource())


@pytest.fixture
def identity_policy() -> NormalizationPolicy:
    return NormalizationPolicy(force_grayscale=False, image_scale=1.0)


@pytest.fixture
def recording_engine() -> RecordingEngine:
    return RecordingEngine()
