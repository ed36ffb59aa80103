# Tile histograms with contrast limiting
"""
Per-tile luminance histograms and the clip-and-redistribute step.

Bins above `limit = max(1, floor(area / 256 * clip_limit))` are cut down to
the limit. The total excess is spread back as `excess // 256` on every bin,
plus one extra count on bins 0 .. (excess % 256) - 1. The redistribution
order is fixed by bin index, so results are deterministic, and the bin
total always equals the tile area.
"""

import math
from typing import NamedTuple
import numpy as np

from ..config import settings
from .tiling import TileDescriptor

NUM_BINS = settings.CLAHE_DEFAULTS["histogram_bins"]


class ClippedHistogram(NamedTuple):
    """Histogram of one tile after contrast limiting."""
    counts: np.ndarray   # int64[256]
    limit: int           # Per-bin ceiling applied before redistribution
    excess: int          # Counts removed by clipping and spread back


def tile_histogram(luma: np.ndarray, tile: TileDescriptor) -> np.ndarray:
    """Count luminance values inside `tile` into 256 bins."""
    rows, cols = tile.slices()
    return np.bincount(luma[rows, cols].ravel(), minlength=NUM_BINS).astype(np.int64)


def clip_limit_for_area(area: int, clip_limit: float) -> int:
    """Per-bin ceiling for a tile of `area` pixels."""
    avg = area / NUM_BINS
    return max(1, math.floor(avg * clip_limit))


def clip_histogram(hist: np.ndarray, clip_limit: float) -> ClippedHistogram:
    """
    Clip `hist` and redistribute the excess.

    Args:
        hist: 256 raw bin counts of one tile.
        clip_limit: Multiplier on the average bin count (> 0).

    Returns:
        ClippedHistogram; `counts` is a new array, `hist` is left untouched.
    """
    area = int(hist.sum())
    limit = clip_limit_for_area(area, clip_limit)

    counts = hist.astype(np.int64, copy=True)
    over = counts > limit
    excess = int((counts[over] - limit).sum())
    counts[over] = limit

    incr, rem = divmod(excess, NUM_BINS)
    counts += incr
    counts[:rem] += 1

    return ClippedHistogram(counts=counts, limit=limit, excess=excess)
