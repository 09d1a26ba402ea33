"""Frame dispatch loop for monolive."""

from monolive.feed.loop import FeedLoop

__all__ = ["FeedLoop"]
