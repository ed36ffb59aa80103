# Tile grid partitioning
"""
Divides a luminance plane into a square grid of rectangular tiles.

The grid is always `tiles x tiles` with `tiles = clamp(floor(grid_size), 2, 64)`.
Tile width and height are `plane // tiles` (at least 1); the last column and
row stretch to the plane edge to absorb the remainder. Tiles are enumerated
row-major, so the mapping table of tile (row, col) lives at
`row * tiles_x + col`.

When a plane side is shorter than the grid, trailing tiles fall past the
edge. They are clipped to the plane and come out empty; no pixel ever
resolves to them.
"""

import math
from dataclasses import dataclass
from typing import List, NamedTuple, Tuple
import numpy as np

from ..config import settings
from ..utils.errors import InvalidParameterError

GRID_MIN = settings.CLAHE_DEFAULTS["grid_min"]
GRID_MAX = settings.CLAHE_DEFAULTS["grid_max"]


class TileDescriptor(NamedTuple):
    """Half-open tile rectangle [x0, x1) x [y0, y1) in plane coordinates."""
    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def width(self) -> int:
        return self.x1 - self.x0

    @property
    def height(self) -> int:
        return self.y1 - self.y0

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.area == 0

    def slices(self) -> Tuple[slice, slice]:
        """Row and column slices selecting this tile from a plane."""
        return slice(self.y0, self.y1), slice(self.x0, self.x1)


def clamp_grid_size(grid_size) -> int:
    """
    Floor and clamp a requested grid size to [2, 64].

    Infinite values clamp to the nearest bound. NaN and non-numeric values
    are rejected.
    """
    if isinstance(grid_size, bool) or not isinstance(grid_size, (int, float, np.integer, np.floating)):
        raise InvalidParameterError(
            f"Grid size must be a number, got {type(grid_size).__name__}",
            parameter="grid_size",
            value=grid_size,
        )
    if isinstance(grid_size, (float, np.floating)):
        if math.isnan(grid_size):
            raise InvalidParameterError(
                "Grid size must not be NaN",
                parameter="grid_size",
                value=grid_size,
            )
        if math.isinf(grid_size):
            return GRID_MAX if grid_size > 0 else GRID_MIN
        grid_size = math.floor(grid_size)
    return max(GRID_MIN, min(GRID_MAX, int(grid_size)))


@dataclass(frozen=True)
class TileGrid:
    """Tile layout of one plane."""
    width: int
    height: int
    tiles_x: int
    tiles_y: int
    tile_w: int
    tile_h: int
    tiles: Tuple[TileDescriptor, ...]

    @property
    def count(self) -> int:
        return self.tiles_x * self.tiles_y

    def index_of(self, row: int, col: int) -> int:
        return row * self.tiles_x + col

    def tile_at(self, x: int, y: int) -> int:
        """Index of the tile whose mapping applies to pixel (x, y)."""
        tx = min(self.tiles_x - 1, x // self.tile_w)
        ty = min(self.tiles_y - 1, y // self.tile_h)
        return self.index_of(ty, tx)

    def column_indices(self) -> np.ndarray:
        """Tile column for every x in the plane."""
        return np.minimum(self.tiles_x - 1, np.arange(self.width) // self.tile_w)

    def row_indices(self) -> np.ndarray:
        """Tile row for every y in the plane."""
        return np.minimum(self.tiles_y - 1, np.arange(self.height) // self.tile_h)


def _axis_bounds(index: int, count: int, step: int, extent: int) -> Tuple[int, int]:
    start = min(index * step, extent)
    if index == count - 1:
        return start, extent
    return start, min(start + step, extent)


def partition(width: int, height: int, grid_size) -> TileGrid:
    """
    Build the tile grid for a `width x height` plane.

    Args:
        width: Plane width in pixels (>= 1).
        height: Plane height in pixels (>= 1).
        grid_size: Requested tiles per axis; floored and clamped to [2, 64].

    Returns:
        TileGrid with tiles enumerated row-major.
    """
    tiles_x = tiles_y = clamp_grid_size(grid_size)
    tile_w = width // tiles_x or 1
    tile_h = height // tiles_y or 1

    tiles: List[TileDescriptor] = []
    for ty in range(tiles_y):
        y0, y1 = _axis_bounds(ty, tiles_y, tile_h, height)
        for tx in range(tiles_x):
            x0, x1 = _axis_bounds(tx, tiles_x, tile_w, width)
            tiles.append(TileDescriptor(x0, y0, x1, y1))

    return TileGrid(
        width=width,
        height=height,
        tiles_x=tiles_x,
        tiles_y=tiles_y,
        tile_w=tile_w,
        tile_h=tile_h,
        tiles=tuple(tiles),
    )
