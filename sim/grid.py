#!/usr/bin/env python3
"""
sim/grid.py
===========
Tile-grid geometry for the intersection playfield.

The playfield is a square grid of fixed-size tiles in screen coordinates
(x grows to the right, y grows downward).  The intersection box is a
square of tiles centred on the grid midpoint.  Everything here is pure:
constants plus coordinate conversions, no simulation state.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

Point = Tuple[float, float]
Tile = Tuple[int, int]

# Three lanes per travel direction: one per route.
LANES_PER_DIRECTION: int = 3


@dataclass(frozen=True)
class GridGeometry:
    """Immutable description of the tile grid.

    Attributes
    ----------
    tile_size : int
        Edge length of one tile in pixels.
    cols, rows : int
        Grid dimensions in tiles.
    intersection_half_tiles : int
        Half-width of the intersection box, in tiles, around the grid
        midpoint.  Must be at least :data:`LANES_PER_DIRECTION`.
    margin_tiles : int
        How far beyond the playfield (in tiles) a vehicle may drift
        before it counts as out of bounds.
    """

    tile_size: int = 30
    cols: int = 30
    rows: int = 30
    intersection_half_tiles: int = 3
    margin_tiles: int = 2

    def __post_init__(self) -> None:
        if self.tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {self.tile_size}")
        if self.intersection_half_tiles < LANES_PER_DIRECTION:
            raise ValueError(
                f"intersection_half_tiles={self.intersection_half_tiles} cannot hold "
                f"{LANES_PER_DIRECTION} lanes per direction"
            )
        if self.margin_tiles < 1:
            raise ValueError("margin_tiles must be at least 1 so spawn tiles stay in bounds")
        for name, size in (("cols", self.cols), ("rows", self.rows)):
            mid = size // 2
            # box edge tiles on both sides must lie inside the grid
            if mid - self.intersection_half_tiles - 1 < 0 or mid + self.intersection_half_tiles >= size:
                raise ValueError(f"{name}={size} too small for the intersection box")

    # ── derived extents ───────────────────────────────────────────────────

    @property
    def width(self) -> int:
        return self.cols * self.tile_size

    @property
    def height(self) -> int:
        return self.rows * self.tile_size

    @property
    def mid_col(self) -> int:
        return self.cols // 2

    @property
    def mid_row(self) -> int:
        return self.rows // 2

    @property
    def margin(self) -> float:
        """Out-of-bounds margin in pixels."""
        return float(self.margin_tiles * self.tile_size)

    @property
    def box_cols(self) -> Tuple[int, int]:
        """Inclusive column range of the intersection box."""
        half = self.intersection_half_tiles
        return self.mid_col - half, self.mid_col + half - 1

    @property
    def box_rows(self) -> Tuple[int, int]:
        """Inclusive row range of the intersection box."""
        half = self.intersection_half_tiles
        return self.mid_row - half, self.mid_row + half - 1

    # ── conversions ───────────────────────────────────────────────────────

    def tile_center(self, col: int, row: int) -> Point:
        """Pixel centre of tile *(col, row)*; tiles outside the grid are allowed."""
        return ((col + 0.5) * self.tile_size, (row + 0.5) * self.tile_size)

    def tile_of(self, x: float, y: float) -> Tile:
        """Tile containing the pixel position *(x, y)*."""
        return (math.floor(x / self.tile_size), math.floor(y / self.tile_size))

    # ── predicates ────────────────────────────────────────────────────────

    def in_intersection_box(self, col: int, row: int) -> bool:
        c0, c1 = self.box_cols
        r0, r1 = self.box_rows
        return c0 <= col <= c1 and r0 <= row <= r1

    def in_intersection(self, x: float, y: float) -> bool:
        """True when the tile under *(x, y)* belongs to the intersection box."""
        return self.in_intersection_box(*self.tile_of(x, y))

    def is_out_of_bounds(self, x: float, y: float) -> bool:
        """True once *(x, y)* lies beyond the playfield plus the margin on any side."""
        m = self.margin
        return x < -m or y < -m or x > self.width + m or y > self.height + m


DEFAULT_GEOMETRY = GridGeometry()
