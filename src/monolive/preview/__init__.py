"""Preview window for monolive."""

from monolive.preview.window import PreviewWindow, parse_key

__all__ = ["PreviewWindow", "parse_key"]
