"""Frame preprocessing for monolive."""

from monolive.processing.normalize import normalize, rescale, scaled_size, to_grayscale

__all__ = ["normalize", "rescale", "scaled_size", "to_grayscale"]
