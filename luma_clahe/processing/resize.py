# Caller-side downscaling
"""
Helper for embedding applications that bound the working size before
enhancing. The transform itself accepts any size; it is O(width * height)
in time and memory.
"""

from typing import Optional, Tuple
import numpy as np
import cv2

from ..config import settings
from ..utils.errors import InvalidParameterError
from ..utils.logger import get_logger
from .color import validate_pixels
from .mapping import round_half_up

logger = get_logger(__name__)

# Select interpolation method
INTERPOLATION_MAP = {
    "area": cv2.INTER_AREA,
    "bilinear": cv2.INTER_LINEAR,
    "bicubic": cv2.INTER_CUBIC,
    "lanczos": cv2.INTER_LANCZOS4,
}


def fitted_size(width: int, height: int, max_dimension: int) -> Tuple[int, int]:
    """
    Size of a `width x height` image scaled to fit within `max_dimension`.

    Never upscales. Each side is rounded half up and kept at least 1.
    """
    scale = min(max_dimension / width, max_dimension / height, 1.0)
    new_w = max(1, int(round_half_up(width * scale)))
    new_h = max(1, int(round_half_up(height * scale)))
    return new_w, new_h


def fit_within(
    pixels: np.ndarray,
    max_dimension: Optional[int] = None,
    interpolation: str = "area",
) -> np.ndarray:
    """
    Downscale `pixels` so neither side exceeds `max_dimension`.

    Args:
        pixels: H x W x 3|4 uint8 image.
        max_dimension: Longest allowed side; defaults to the caller limit (1200).
        interpolation: One of INTERPOLATION_MAP's keys.

    Returns:
        A new array; a copy of the input when it already fits.
    """
    if max_dimension is None:
        max_dimension = settings.CALLER_LIMITS["max_dimension"]
    if isinstance(max_dimension, bool) or not isinstance(max_dimension, (int, np.integer)) or max_dimension <= 0:
        raise InvalidParameterError(
            f"max_dimension must be a positive integer, got {max_dimension!r}",
            parameter="max_dimension",
            value=max_dimension,
        )
    if interpolation not in INTERPOLATION_MAP:
        raise InvalidParameterError(
            f"Unknown interpolation '{interpolation}'",
            parameter="interpolation",
            value=interpolation,
        )

    height, width, _ = validate_pixels(pixels)
    new_w, new_h = fitted_size(width, height, max_dimension)
    if (new_w, new_h) == (width, height):
        return pixels.copy()

    logger.debug("Downscaling %dx%d -> %dx%d", width, height, new_w, new_h)
    return cv2.resize(pixels, (new_w, new_h), interpolation=INTERPOLATION_MAP[interpolation])
