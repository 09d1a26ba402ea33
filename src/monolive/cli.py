"""Command-line interface for the monolive feed.

Opens the selected camera backend, initializes the tracking engine,
runs the dispatch loop and always finishes with engine shutdown and
trajectory export.

Exit codes: 0 on a clean stop, 1 on bad arguments, a capture backend
that cannot be opened, or any fatal error.
"""

from __future__ import annotations

import argparse
import logging
import signal
import sys
from contextlib import ExitStack
from pathlib import Path

import yaml

from monolive.config.settings import Settings
from monolive.domain.models import BackendKind

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="monolive",
        description="Feed a live camera to a monocular tracking engine",
    )
    parser.add_argument(
        "vocabulary", type=Path,
        help="Path to the engine vocabulary (e.g. ORBvoc.txt)",
    )
    parser.add_argument(
        "engine_settings", type=Path, metavar="settings",
        help="Path to the engine settings YAML",
    )
    parser.add_argument(
        "--gray", action="store_true",
        help="Convert frames to grayscale before tracking",
    )
    parser.add_argument(
        "--gstreamer", action="store_true",
        help="Capture through a libcamera GStreamer pipeline instead of V4L2",
    )
    parser.add_argument(
        "--no-preview", action="store_true",
        help="Do not open the OpenCV preview window",
    )
    parser.add_argument(
        "--no-viewer", action="store_true",
        help="Do not start the engine's map viewer",
    )
    parser.add_argument(
        "--engine", choices=["orbslam3", "null"], default=None,
        help="Tracking engine (default: orbslam3; 'null' only checks the camera path)",
    )
    parser.add_argument(
        "--max-frames", type=positive_int, default=None, metavar="N",
        help="Stop after dispatching this many frames",
    )
    parser.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Keyframe trajectory output path (default: KeyFrameTrajectory.txt)",
    )
    parser.add_argument(
        "-c", "--config", type=Path, default=None,
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Apply command-line flags on top of the loaded settings."""
    if args.gray:
        settings.normalization.force_grayscale = True
    if args.gstreamer:
        settings.capture.backend = BackendKind.NAMED_PIPELINE
    if args.no_preview:
        settings.preview.enabled = False
    if args.no_viewer:
        settings.engine.use_viewer = False
    if args.engine:
        settings.engine.name = args.engine
    if args.max_frames is not None:
        settings.feed.max_frames = args.max_frames
    if args.output is not None:
        settings.export.trajectory_path = str(args.output)
    if args.verbose:
        settings.logging.level = "DEBUG"
    return settings


def run_feed(settings: Settings, vocabulary: Path, engine_settings: Path) -> None:
    """Open capture and engine, run the loop, then shut down and export."""
    from monolive.capture import create_capture
    from monolive.clock import FrameClock
    from monolive.domain.models import NormalizationPolicy
    from monolive.engine import create_engine, tracking_session
    from monolive.feed.loop import FeedLoop
    from monolive.preview.window import PreviewWindow

    with ExitStack() as stack:
        capture = stack.enter_context(create_capture(settings.capture))
        engine = create_engine(settings.engine, vocabulary, engine_settings)
        stack.enter_context(tracking_session(engine, settings.export.trajectory_path))

        policy = NormalizationPolicy(
            force_grayscale=settings.normalization.force_grayscale,
            image_scale=engine.get_image_scale(),
        )
        preview = None
        if settings.preview.enabled:
            preview = PreviewWindow(
                title=settings.preview.window_title,
                quit_keys=settings.preview.quit_keys,
            )

        loop = FeedLoop(
            capture=capture,
            engine=engine,
            clock=FrameClock(),
            policy=policy,
            preview=preview,
            max_frames=settings.feed.max_frames,
            log_interval=settings.feed.log_interval,
        )

        print("\n-------\nStarting live monocular feed...")
        if preview is not None:
            print("Press 'q' or ESC in the preview window to quit.")
        else:
            print("Press Ctrl+C to quit.")

        previous = signal.signal(signal.SIGTERM, lambda signum, frame: loop.stop())
        try:
            summary = loop.run()
        finally:
            signal.signal(signal.SIGTERM, previous)

    print(f"\nStopped: {summary.stop_reason.value if summary.stop_reason else 'unknown'}")
    print(f"Frames dispatched: {summary.frames_dispatched}")
    print(f"Trajectory saved to {settings.export.trajectory_path}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the monolive CLI."""
    try:
        args = parse_args(argv)
    except SystemExit as exc:
        # argparse exits 2 on usage errors; report those as 1.
        return 0 if exc.code in (0, None) else 1

    from monolive.capture.base import CaptureOpenError
    from monolive.config.settings import load_settings
    from monolive.engine.base import EngineError
    from monolive.utils.logging import setup_logging

    setup_logging()
    try:
        settings = apply_overrides(load_settings(args.config), args)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error("Invalid configuration: %s", e)
        return 1
    setup_logging(settings.logging)

    try:
        run_feed(settings, args.vocabulary, args.engine_settings)
    except CaptureOpenError as e:
        logger.error("Error: %s", e)
        return 1
    except EngineError as e:
        logger.error("Tracking engine error: %s", e)
        return 1
    except KeyboardInterrupt:
        # Ctrl+C before the loop started, e.g. while the vocabulary loads.
        logger.info("Interrupted before the feed started")
        return 0
    except Exception as e:
        logger.error("Fatal error: %s", e, exc_info=args.verbose)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
