"""Abstract base class for the monocular tracking engine.

The engine (feature extraction, pose optimization, mapping) is an
external collaborator. This interface is the narrow surface the feed
uses: construct, ask for the image scale, track frames, shut down and
export the keyframe trajectory.
"""

from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod
from pathlib import Path

import numpy as np

logger = logging.getLogger(__name__)


class SensorMode(str, enum.Enum):
    """Sensor configuration passed to the engine at initialization."""

    MONOCULAR = "MONOCULAR"


class TrackingEngine(ABC):
    """Abstract interface for a monocular tracking engine.

    Construction initializes the engine. Callers must invoke ``track``
    from a single thread with non-decreasing timestamps, and must call
    ``shutdown`` followed by ``export_trajectory`` exactly once when done
    (see ``monolive.engine.session.tracking_session``).
    """

    name: str = "engine"

    def __init__(
        self,
        vocabulary_path: Path | str,
        settings_path: Path | str,
        mode: SensorMode = SensorMode.MONOCULAR,
        use_viewer: bool = True,
    ) -> None:
        self._vocabulary_path = Path(vocabulary_path)
        self._settings_path = Path(settings_path)
        self._mode = mode
        self._use_viewer = use_viewer

    @property
    def mode(self) -> SensorMode:
        return self._mode

    @abstractmethod
    def get_image_scale(self) -> float:
        """Scale factor frames must be resized by before tracking.

        Raises:
            EngineError: If the engine reports a non-positive scale.
        """
        ...

    @abstractmethod
    def track(self, image: np.ndarray, timestamp: float) -> None:
        """Track a single normalized frame. Blocks until the engine returns."""
        ...

    @abstractmethod
    def shutdown(self) -> None:
        """Stop background processing and release engine resources."""
        ...

    @abstractmethod
    def export_trajectory(self, path: Path | str) -> None:
        """Write the accumulated keyframe trajectory to ``path``."""
        ...


class EngineError(Exception):
    """Raised when the tracking engine cannot be initialized or used."""

    def __init__(self, message: str, engine: str = "") -> None:
        super().__init__(message)
        self.engine = engine
