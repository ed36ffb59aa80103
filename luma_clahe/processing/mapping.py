# Mapping tables from clipped histograms
import numpy as np

from .histogram import NUM_BINS

IDENTITY_TABLE = np.arange(NUM_BINS, dtype=np.uint8)
IDENTITY_TABLE.setflags(write=False)


def round_half_up(values):
    """
    Round non-negative values to the nearest integer, ties away from zero.

    `x - floor(x)` is exact in floating point, whereas `floor(x + 0.5)`
    rounds 0.49999999999999994 up to 1.
    """
    values = np.asarray(values, dtype=np.float64)
    whole = np.floor(values)
    return np.where(values - whole >= 0.5, whole + 1.0, whole)


def build_mapping_table(counts: np.ndarray) -> np.ndarray:
    """
    Turn a clipped histogram into a 256-entry uint8 lookup table.

    Entry i is `round(cdf[i] * 255 / cdf[255])`, rounded half up and
    clamped to [0, 255]. The table is non-decreasing. An all-zero histogram
    (an empty tile) yields the identity table.
    """
    cdf = np.cumsum(counts, dtype=np.int64)
    total = int(cdf[-1])
    if total == 0:
        return IDENTITY_TABLE.copy()

    scale = 255.0 / total
    table = round_half_up(cdf * scale)
    return np.clip(table, 0, 255).astype(np.uint8)
