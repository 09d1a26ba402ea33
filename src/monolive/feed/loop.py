"""The dispatch loop that feeds camera frames to the tracking engine.

Ties together capture, timestamping, normalization, the tracking engine
and the optional preview window in a single synchronous loop.
"""

from __future__ import annotations

import logging

from monolive.capture.base import CaptureSource
from monolive.clock import FrameClock
from monolive.domain.models import (
    Frame,
    LoopState,
    NormalizationPolicy,
    RunSummary,
    StopReason,
)
from monolive.engine.base import TrackingEngine
from monolive.preview.window import PreviewWindow
from monolive.processing.normalize import normalize

logger = logging.getLogger(__name__)


class FeedLoop:
    """Acquire -> stamp -> normalize -> track -> preview, one frame at a time.

    The engine call is synchronous: the next frame is not acquired until
    it returns. Stop requests (end of stream, quit key, ``stop()``, frame
    limit) are honored between iterations only.
    """

    def __init__(
        self,
        capture: CaptureSource,
        engine: TrackingEngine,
        clock: FrameClock,
        policy: NormalizationPolicy,
        preview: PreviewWindow | None = None,
        max_frames: int | None = None,
        log_interval: int = 300,
    ) -> None:
        self._capture = capture
        self._engine = engine
        self._clock = clock
        self._policy = policy
        self._preview = preview
        self._max_frames = max_frames
        self._log_interval = log_interval
        self._state = LoopState.STOPPED
        self._summary = RunSummary()
        self._first_size: tuple[int, int] | None = None
        self._size_warned = False

    @property
    def state(self) -> LoopState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is LoopState.RUNNING

    @property
    def policy(self) -> NormalizationPolicy:
        return self._policy

    def stop(self) -> None:
        """Ask the loop to stop after the current iteration."""
        self._request_stop(StopReason.USER_STOP)
        logger.info("Feed loop stop requested")

    def run(self) -> RunSummary:
        """Dispatch frames until a stop condition, then return a summary.

        Exceptions from the capture source or the engine propagate after
        the loop has moved to the stopped state. Ctrl+C is treated as a
        user stop.
        """
        self._summary = RunSummary()
        self._first_size = None
        self._size_warned = False
        self._state = LoopState.RUNNING
        self._clock.start()

        logger.info(
            "Feed loop starting: capture=%s engine=%s gray=%s scale=%g",
            self._capture.name,
            self._engine.name,
            self._policy.force_grayscale,
            self._policy.image_scale,
        )

        try:
            while self._state is LoopState.RUNNING:
                self._step()
        except KeyboardInterrupt:
            logger.info("Interrupted, stopping")
            self._request_stop(StopReason.USER_STOP)
        except Exception as e:
            self._request_stop(StopReason.ERROR)
            logger.error("Feed loop fatal error: %s", e)
            raise
        finally:
            self._state = LoopState.STOPPED
            if self._preview is not None:
                self._preview.close()
            summary = self._summary
            logger.info(
                "Feed loop finished: reason=%s, frames=%d, %.1f fps",
                summary.stop_reason.value if summary.stop_reason else "none",
                summary.frames_dispatched,
                summary.mean_fps,
            )

        return self._summary

    def _request_stop(self, reason: StopReason) -> None:
        if self._state is LoopState.RUNNING:
            self._state = LoopState.STOPPING
            self._summary.stop_reason = reason

    def _step(self) -> None:
        image = self._capture.read_frame()
        if image is None:
            logger.warning("Failed to grab frame from %s, stopping", self._capture.name)
            self._request_stop(StopReason.END_OF_STREAM)
            return

        frame = Frame(
            image=image,
            timestamp=self._clock.now(),
            frame_number=self._summary.frames_dispatched,
        )
        self._check_size(frame)

        processed = normalize(frame.image, self._policy)
        self._engine.track(processed, frame.timestamp)
        self._record(frame)

        if self._max_frames is not None and self._summary.frames_dispatched >= self._max_frames:
            logger.info("Frame limit reached (%d)", self._max_frames)
            self._request_stop(StopReason.USER_STOP)

        if self._preview is not None and self._preview.show(frame.image):
            self._request_stop(StopReason.USER_STOP)

    def _record(self, frame: Frame) -> None:
        summary = self._summary
        summary.frames_dispatched += 1
        if summary.first_timestamp is None:
            summary.first_timestamp = frame.timestamp
        summary.last_timestamp = frame.timestamp
        if summary.frames_dispatched % self._log_interval == 0:
            logger.info(
                "Dispatched %d frames (t=%.2fs, %.1f fps)",
                summary.frames_dispatched, frame.timestamp, summary.mean_fps,
            )

    def _check_size(self, frame: Frame) -> None:
        """Warn once if the camera changes resolution mid-run."""
        size = (frame.width, frame.height)
        if self._first_size is None:
            self._first_size = size
            logger.debug("First frame: %dx%d, %d channel(s)", frame.width, frame.height, frame.channels)
        elif size != self._first_size and not self._size_warned:
            logger.warning(
                "Frame size changed from %dx%d to %dx%d",
                *self._first_size, *size,
            )
            self._size_warned = True
