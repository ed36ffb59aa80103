# Pixel reconstruction
"""
Remaps luminance through the table of the tile containing each pixel and
recombines it with the untouched chroma planes.

There is no blending between neighbouring tiles: pixel (x, y) uses the table
of tile `(min(tiles_y-1, y // tile_h), min(tiles_x-1, x // tile_w))`, so tile
seams are visible and reproducible.
"""

from typing import List, Optional, Tuple
import numpy as np

from ..config import settings
from .color import ChannelPlanes, ycbcr_to_rgb
from .execution import ExecutionStrategy, SerialStrategy
from .tiling import TileGrid


def stack_tables(tables: List[np.ndarray]) -> np.ndarray:
    """Stack per-tile tables into one read-only (n_tiles, 256) array."""
    stacked = np.stack(tables).astype(np.uint8, copy=False)
    stacked.setflags(write=False)
    return stacked


def tile_index_map(grid: TileGrid) -> np.ndarray:
    """Per-pixel tile index (H x W) following the nearest-tile rule."""
    rows = grid.row_indices()
    cols = grid.column_indices()
    return rows[:, None] * grid.tiles_x + cols[None, :]


def row_bands(height: int, band_height: Optional[int] = None) -> List[Tuple[int, int]]:
    """Split [0, height) into disjoint half-open row ranges."""
    if band_height is None:
        band_height = settings.EXECUTION_DEFAULTS["row_band_height"]
    band_height = max(1, int(band_height))
    return [(start, min(start + band_height, height)) for start in range(0, height, band_height)]


def remap_luminance(luma: np.ndarray, grid: TileGrid, tables: np.ndarray) -> np.ndarray:
    """Apply the nearest-tile table to every luminance sample."""
    return tables[tile_index_map(grid), luma]


def reconstruct(
    planes: ChannelPlanes,
    grid: TileGrid,
    tables: np.ndarray,
    channels: int = 3,
    strategy: Optional[ExecutionStrategy] = None,
    band_height: Optional[int] = None,
) -> np.ndarray:
    """
    Build the output RGB(A) image from remapped luminance and original chroma.

    Args:
        planes: Y, Cb, Cr planes of the input.
        grid: Tile layout used to build `tables`.
        tables: (grid.count, 256) uint8 mapping tables, row-major tile order.
        channels: 3 for RGB output, 4 for RGBA with opaque alpha.
        strategy: Execution strategy for the row bands (serial by default).
        band_height: Rows per work item.

    Returns:
        New H x W x channels uint8 array.
    """
    strategy = strategy or SerialStrategy()
    height, width = planes.shape
    out = np.empty((height, width, channels), dtype=np.uint8)

    cols = grid.column_indices()
    rows = grid.row_indices()

    def _band(bounds):
        y0, y1 = bounds
        tile_index = rows[y0:y1, None] * grid.tiles_x + cols[None, :]
        mapped = tables[tile_index, planes.y[y0:y1]]
        # Each band owns its output rows exclusively
        out[y0:y1] = ycbcr_to_rgb(mapped, planes.cb[y0:y1], planes.cr[y0:y1], channels)

    strategy.map(_band, row_bands(height, band_height))
    return out
