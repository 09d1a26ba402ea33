"""monolive -- Live camera feed for a monocular visual tracking engine.

This package pulls frames from a live camera on a single-board computer,
stamps them against a monotonic clock, normalizes them to what the
tracking engine expects, and hands them over one at a time. On exit the
engine is shut down and its keyframe trajectory is exported.
"""

__version__ = "0.1.0"
