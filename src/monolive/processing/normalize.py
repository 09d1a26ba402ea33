"""Frame normalization before dispatch to the tracking engine.

The order is fixed: grayscale conversion first, then rescaling. Resizing
a color image and converting afterwards produces different pixel values
than the engine was calibrated for.
"""

from __future__ import annotations

import logging
import math

import cv2
import numpy as np

from monolive.domain.models import NormalizationPolicy

logger = logging.getLogger(__name__)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (C ``lround``)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def scaled_size(width: int, height: int, scale: float) -> tuple[int, int]:
    """Target (width, height) for a uniform rescale by ``scale``."""
    return round_half_away(width * scale), round_half_away(height * scale)


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """Convert a BGR image to single-channel intensity.

    Images that are already single-channel are returned unchanged.
    """
    if image.ndim == 2 or image.shape[2] == 1:
        return image
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


def rescale(image: np.ndarray, scale: float) -> np.ndarray:
    """Resize by a uniform factor.

    Both target dimensions come from a single scaled_size() call. If
    either rounds to zero or below, the image is returned unchanged.
    """
    if scale == 1.0:
        return image
    h, w = image.shape[:2]
    new_w, new_h = scaled_size(w, h, scale)
    if new_w <= 0 or new_h <= 0:
        logger.debug("Skipping resize of %dx%d by %g: degenerate target size", w, h, scale)
        return image
    return cv2.resize(image, (new_w, new_h), interpolation=cv2.INTER_LINEAR)


def normalize(image: np.ndarray, policy: NormalizationPolicy) -> np.ndarray:
    """Apply the normalization policy: grayscale (optional), then rescale."""
    if policy.force_grayscale:
        image = to_grayscale(image)
    return rescale(image, policy.image_scale)
