"""Scoped shutdown and trajectory export for a tracking engine."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from monolive.engine.base import TrackingEngine

logger = logging.getLogger(__name__)


@contextmanager
def tracking_session(
    engine: TrackingEngine,
    trajectory_path: Path | str,
) -> Iterator[TrackingEngine]:
    """Yield the engine; on exit shut it down and export its trajectory.

    Both calls run exactly once on every exit path, including when the
    body raises, so an interrupted run still leaves a (possibly short)
    trajectory behind. Export runs even if shutdown fails. Errors from
    either call propagate, chained to any exception already in flight.
    """
    path = Path(trajectory_path)
    try:
        yield engine
    finally:
        try:
            logger.info("Shutting down %s engine", engine.name)
            engine.shutdown()
        finally:
            logger.info("Saving keyframe trajectory to %s", path)
            engine.export_trajectory(path)
