"""Tracking engine interface for monolive.

Public API:
    TrackingEngine -- Abstract base class
    EngineError -- Engine failures
    SensorMode -- Sensor configuration
    create_engine -- Factory keyed by engine name
    tracking_session -- Guaranteed shutdown + trajectory export
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from monolive.engine.base import EngineError, SensorMode, TrackingEngine
from monolive.engine.session import tracking_session

if TYPE_CHECKING:
    from monolive.config.settings import EngineConfig

__all__ = [
    "EngineError",
    "NullEngine",
    "ORBSlam3Engine",
    "SensorMode",
    "TrackingEngine",
    "create_engine",
    "tracking_session",
]


def create_engine(
    config: EngineConfig,
    vocabulary_path: Path | str,
    settings_path: Path | str,
) -> TrackingEngine:
    """Initialize the engine named by ``config.name`` in monocular mode.

    Raises:
        EngineError: If the name is unknown or initialization fails.
    """
    if config.name == "orbslam3":
        from monolive.engine.orbslam3 import ORBSlam3Engine
        return ORBSlam3Engine(
            vocabulary_path, settings_path, SensorMode.MONOCULAR, config.use_viewer,
        )
    if config.name == "null":
        from monolive.engine.null import NullEngine
        return NullEngine(
            vocabulary_path, settings_path, SensorMode.MONOCULAR, config.use_viewer,
            image_scale=config.null_image_scale,
        )
    raise EngineError(f"Unknown engine: {config.name}", engine=config.name)


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations that require external deps."""
    if name == "ORBSlam3Engine":
        from monolive.engine.orbslam3 import ORBSlam3Engine
        return ORBSlam3Engine
    if name == "NullEngine":
        from monolive.engine.null import NullEngine
        return NullEngine
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
