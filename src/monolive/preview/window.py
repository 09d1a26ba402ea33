"""Optional on-screen preview of the raw camera frames.

The preview never gates correctness: it shows the frame as captured
(before normalization) and reports whether a quit key was pressed.
"""

from __future__ import annotations

import logging

import cv2
import numpy as np

logger = logging.getLogger(__name__)

KEY_ALIASES = {"esc": 27, "escape": 27, "space": 32, "enter": 13}


def parse_key(name: str) -> int:
    """Map a key name ('q', 'esc', ...) to the code cv2.waitKey returns."""
    lowered = name.lower()
    if lowered in KEY_ALIASES:
        return KEY_ALIASES[lowered]
    if len(name) == 1:
        return ord(name)
    raise ValueError(f"Unknown key name: {name!r}")


class PreviewWindow:
    """An OpenCV HighGUI window polled once per dispatched frame.

    If HighGUI is unavailable (headless board, OpenCV built without GUI
    support) the first failure is logged and the window disables itself;
    the feed keeps running without a preview.
    """

    def __init__(
        self,
        title: str = "monolive",
        quit_keys: list[str] | None = None,
    ) -> None:
        self._title = title
        self._quit_codes = frozenset(parse_key(k) for k in (quit_keys or ["q", "esc"]))
        self._is_open = False
        self._disabled = False

    @property
    def title(self) -> str:
        return self._title

    @property
    def disabled(self) -> bool:
        return self._disabled

    def show(self, image: np.ndarray) -> bool:
        """Display ``image`` and poll the keyboard for 1 ms.

        Returns:
            True if a quit key was pressed. Always False once the window
            has been disabled.
        """
        if self._disabled:
            return False
        try:
            cv2.imshow(self._title, image)
            self._is_open = True
            key = cv2.waitKey(1) & 0xFF
        except cv2.error as e:
            logger.warning("Preview unavailable, continuing without it: %s", e)
            self._disabled = True
            return False
        if key in self._quit_codes:
            logger.info("Quit key pressed in preview window")
            return True
        return False

    def close(self) -> None:
        """Destroy the window if it was ever shown."""
        if self._is_open and not self._disabled:
            cv2.destroyWindow(self._title)
        self._is_open = False
