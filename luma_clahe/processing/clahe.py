# Luminance CLAHE pipeline
"""
Contrast-Limited Adaptive Histogram Equalization on the luminance channel.

Pipeline per call:
    RGB -> (Y, Cb, Cr) -> tile grid -> per-tile clipped histogram
        -> per-tile mapping table -> nearest-tile remap of Y -> RGB

Chroma is carried through unchanged, so hue and saturation are preserved up
to 8-bit rounding. Nothing is cached between calls.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple
import numpy as np

from ..config import settings
from ..utils.errors import InvalidDimensionsError, InvalidParameterError, wrap_errors
from ..utils.logger import get_logger
from .color import (
    ChannelPlanes,
    from_interleaved,
    rgb_to_ycbcr,
    to_interleaved,
    validate_pixels,
)
from .execution import ExecutionContext, ExecutionStrategy
from .histogram import ClippedHistogram, clip_histogram, tile_histogram
from .mapping import build_mapping_table
from .reconstruct import reconstruct, stack_tables
from .tiling import TileGrid, clamp_grid_size, partition

logger = get_logger(__name__)


def validate_clip_limit(clip_limit) -> float:
    """Accept any finite positive real; reject everything else."""
    if isinstance(clip_limit, bool) or not isinstance(clip_limit, (int, float, np.integer, np.floating)):
        raise InvalidParameterError(
            f"Clip limit must be a number, got {type(clip_limit).__name__}",
            parameter="clip_limit",
            value=clip_limit,
        )
    value = float(clip_limit)
    if not math.isfinite(value) or value <= 0:
        logger.warning("Rejected clip limit %r", clip_limit)
        raise InvalidParameterError(
            f"Clip limit must be a finite positive number, got {clip_limit!r}",
            parameter="clip_limit",
            value=clip_limit,
            user_message="Clip limit must be greater than zero.",
        )
    return value


def outside_ui_ranges(clip_limit: float, tiles: int) -> List[str]:
    """
    Names of parameters outside the ranges a typical slider UI offers.

    Purely informational; the transform accepts any valid value.
    """
    clip_lo, clip_hi = settings.CALLER_LIMITS["ui_clip_limit_range"]
    grid_lo, grid_hi = settings.CALLER_LIMITS["ui_grid_range"]
    notes = []
    if not clip_lo <= clip_limit <= clip_hi:
        notes.append("clip_limit")
    if not grid_lo <= tiles <= grid_hi:
        notes.append("grid_size")
    return notes


@dataclass
class ClaheResult:
    """Output image plus the intermediate per-tile state that produced it."""
    image: np.ndarray
    grid: TileGrid
    histograms: List[np.ndarray]          # Raw per-tile histograms
    clipped: List[ClippedHistogram]       # After clip-and-redistribute
    tables: np.ndarray                    # (n_tiles, 256) uint8, read-only
    strategy: str


@wrap_errors("tile mapping")
def build_tile_tables(
    luma: np.ndarray,
    grid: TileGrid,
    clip_limit: float,
    strategy: ExecutionStrategy,
) -> Tuple[List[np.ndarray], List[ClippedHistogram], np.ndarray]:
    """
    Histogram, clip and map every tile of `grid`.

    Returns:
        (raw histograms, clipped histograms, stacked tables), all in row-major
        tile order.
    """
    def _tile(tile):
        hist = tile_histogram(luma, tile)
        clipped = clip_histogram(hist, clip_limit)
        return hist, clipped, build_mapping_table(clipped.counts)

    per_tile = strategy.map(_tile, grid.tiles)
    histograms = [item[0] for item in per_tile]
    clipped = [item[1] for item in per_tile]
    tables = stack_tables([item[2] for item in per_tile])
    return histograms, clipped, tables


@wrap_errors("color conversion")
def _split_planes(pixels: np.ndarray) -> ChannelPlanes:
    return rgb_to_ycbcr(pixels)


@wrap_errors("reconstruction")
def _reconstruct(planes, grid, tables, channels, strategy) -> np.ndarray:
    return reconstruct(planes, grid, tables, channels=channels, strategy=strategy)


def enhance_with_details(
    pixels: np.ndarray,
    clip_limit: float = settings.CLAHE_DEFAULTS["clip_limit"],
    grid_size=settings.CLAHE_DEFAULTS["grid_size"],
    *,
    parallel: Optional[bool] = None,
    context: Optional[ExecutionContext] = None,
) -> ClaheResult:
    """
    Run luminance CLAHE and keep the per-tile intermediates.

    Args:
        pixels: H x W x 3 (RGB) or H x W x 4 (RGBA) uint8 array. Not modified.
        clip_limit: Finite positive multiplier on the average bin count.
        grid_size: Tiles per axis; floored and clamped to [2, 64].
        parallel: True/False to force thread-pool/serial execution, None for auto.
        context: Pre-built execution context; overrides `parallel`.

    Returns:
        ClaheResult whose `image` has the same shape and dtype as `pixels`.

    Raises:
        InvalidDimensionsError: Empty image or unsupported array layout.
        InvalidParameterError: Bad clip limit, grid size or pixel dtype.
    """
    try:
        height, width, channels = validate_pixels(pixels)
    except (InvalidDimensionsError, InvalidParameterError) as e:
        logger.warning("Rejected pixel input: %s", e)
        raise
    clip = validate_clip_limit(clip_limit)
    tiles = clamp_grid_size(grid_size)
    for name in outside_ui_ranges(clip, tiles):
        logger.debug("%s is outside the usual UI range (clip %.2f, grid %d)", name, clip, tiles)

    context = context or ExecutionContext(parallel=parallel)
    strategy = context.get_strategy(width * height)

    planes = _split_planes(pixels)
    grid = partition(width, height, tiles)
    logger.debug(
        "Tile grid %dx%d, tile size %dx%d, plane %dx%d",
        grid.tiles_x, grid.tiles_y, grid.tile_w, grid.tile_h, width, height,
    )

    histograms, clipped, tables = build_tile_tables(planes.y, grid, clip, strategy)
    logger.debug(
        "Clip limits per tile: min=%d max=%d",
        min(c.limit for c in clipped), max(c.limit for c in clipped),
    )

    image = _reconstruct(planes, grid, tables, channels, strategy)
    logger.info(
        "Enhanced %dx%d image (grid %dx%d, clip limit %.2f, %s)",
        width, height, grid.tiles_x, grid.tiles_y, clip, strategy.name,
    )
    return ClaheResult(
        image=image,
        grid=grid,
        histograms=histograms,
        clipped=clipped,
        tables=tables,
        strategy=strategy.name,
    )


def enhance(
    pixels: np.ndarray,
    clip_limit: float = settings.CLAHE_DEFAULTS["clip_limit"],
    grid_size=settings.CLAHE_DEFAULTS["grid_size"],
    *,
    parallel: Optional[bool] = None,
) -> np.ndarray:
    """
    Enhance local contrast of an RGB(A) image on its luminance channel.

    Returns a new uint8 array of the same shape; RGBA output is fully opaque.
    """
    return enhance_with_details(pixels, clip_limit, grid_size, parallel=parallel).image


def enhance_interleaved(
    data,
    width: int,
    height: int,
    channels: int = 4,
    clip_limit: float = settings.CLAHE_DEFAULTS["clip_limit"],
    grid_size=settings.CLAHE_DEFAULTS["grid_size"],
    *,
    parallel: Optional[bool] = None,
) -> bytes:
    """Enhance a flat row-major RGB/RGBA byte buffer and return a new one."""
    pixels = from_interleaved(data, width, height, channels)
    return to_interleaved(enhance(pixels, clip_limit, grid_size, parallel=parallel))


class ClaheEnhancer:
    """
    Reusable CLAHE settings.

    Parameters are validated once at construction; each `apply` call is an
    independent transform with no state carried over.
    """

    def __init__(
        self,
        clip_limit: float = settings.CLAHE_DEFAULTS["clip_limit"],
        grid_size=settings.CLAHE_DEFAULTS["grid_size"],
        context: Optional[ExecutionContext] = None,
    ):
        self.clip_limit = validate_clip_limit(clip_limit)
        self.grid_size = clamp_grid_size(grid_size)
        self._context = context or ExecutionContext()

    def apply(self, pixels: np.ndarray) -> np.ndarray:
        return self.apply_with_details(pixels).image

    def apply_with_details(self, pixels: np.ndarray) -> ClaheResult:
        return enhance_with_details(
            pixels, self.clip_limit, self.grid_size, context=self._context
        )

    def __repr__(self) -> str:
        return f"ClaheEnhancer(clip_limit={self.clip_limit}, grid_size={self.grid_size})"
