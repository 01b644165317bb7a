#!/usr/bin/env python3
"""
sim/routes.py
=============
Directions, routes and the path compiler.

:func:`compile_path` turns an entry :class:`Direction` and a turn
:class:`Route` into a short tuple of tile-centre waypoints:

    spawn tile → box-edge tile → [turn pivot] → far exit tile

A turn is expressed as a lane coordinate swap at the pivot tile rather
than as a curved arc, so every segment of every path is axis-aligned.

Lane layout (right-hand traffic, ``mid`` = grid midpoint tile)::

    UP     vertical   mid + k        k = 0 LEFT, 1 STRAIGHT, 2 RIGHT
    DOWN   vertical   mid - 1 - k
    RIGHT  horizontal mid + k
    LEFT   horizontal mid - 1 - k
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, NamedTuple, Tuple

from sim.grid import DEFAULT_GEOMETRY, GridGeometry, Point, Tile

Path = Tuple[Point, ...]


class Direction(Enum):
    """Compass heading a vehicle travels toward (screen coordinates, y down)."""

    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    @property
    def vector(self) -> Tuple[float, float]:
        """Unit heading vector in screen space."""
        return _VECTORS[self]

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)


class Route(Enum):
    """Turn choice relative to the vehicle's own heading."""

    LEFT = "LEFT"
    STRAIGHT = "STRAIGHT"
    RIGHT = "RIGHT"


class Axis(Enum):
    VERTICAL = "VERTICAL"
    HORIZONTAL = "HORIZONTAL"


class Lane(NamedTuple):
    """A lane is its travel axis plus the tile column (vertical) or row (horizontal)."""

    axis: Axis
    index: int


_VECTORS: Dict[Direction, Tuple[float, float]] = {
    Direction.UP: (0.0, -1.0),
    Direction.DOWN: (0.0, 1.0),
    Direction.LEFT: (-1.0, 0.0),
    Direction.RIGHT: (1.0, 0.0),
}

_LANE_SLOT: Dict[Route, int] = {
    Route.LEFT: 0,
    Route.STRAIGHT: 1,
    Route.RIGHT: 2,
}

# Heading after turning left / right, in screen space.
_LEFT_OF: Dict[Direction, Direction] = {
    Direction.UP: Direction.LEFT,
    Direction.LEFT: Direction.DOWN,
    Direction.DOWN: Direction.RIGHT,
    Direction.RIGHT: Direction.UP,
}
_RIGHT_OF: Dict[Direction, Direction] = {v: k for k, v in _LEFT_OF.items()}


def exit_heading(direction: Direction, route: Route) -> Direction:
    """Heading a vehicle leaves the intersection with."""
    if route is Route.LEFT:
        return _LEFT_OF[direction]
    if route is Route.RIGHT:
        return _RIGHT_OF[direction]
    return direction


def lane_for(heading: Direction, route: Route,
             geometry: GridGeometry = DEFAULT_GEOMETRY) -> Lane:
    """Lane carrying *route* traffic for vehicles travelling toward *heading*."""
    k = _LANE_SLOT[route]
    if heading is Direction.UP:
        return Lane(Axis.VERTICAL, geometry.mid_col + k)
    if heading is Direction.DOWN:
        return Lane(Axis.VERTICAL, geometry.mid_col - 1 - k)
    if heading is Direction.RIGHT:
        return Lane(Axis.HORIZONTAL, geometry.mid_row + k)
    return Lane(Axis.HORIZONTAL, geometry.mid_row - 1 - k)


def entry_lane(direction: Direction, route: Route,
               geometry: GridGeometry = DEFAULT_GEOMETRY) -> Lane:
    return lane_for(direction, route, geometry)


def exit_lane(direction: Direction, route: Route,
              geometry: GridGeometry = DEFAULT_GEOMETRY) -> Lane:
    return lane_for(exit_heading(direction, route), route, geometry)


# ── tile helpers ─────────────────────────────────────────────────────────────

def _on_lane(lane: Lane, along: int) -> Tile:
    """Tile on *lane* at position *along* on the travel axis."""
    if lane.axis is Axis.VERTICAL:
        return (lane.index, along)
    return (along, lane.index)


def _spawn_along(direction: Direction, g: GridGeometry) -> int:
    # One tile outside the edge the vehicle comes from.
    if direction is Direction.UP:
        return g.rows
    if direction is Direction.DOWN:
        return -1
    if direction is Direction.RIGHT:
        return -1
    return g.cols


def _box_edge_along(direction: Direction, g: GridGeometry) -> int:
    # First tile before the intersection box on the approach side.
    half = g.intersection_half_tiles
    if direction is Direction.UP:
        return g.mid_row + half
    if direction is Direction.DOWN:
        return g.mid_row - half - 1
    if direction is Direction.RIGHT:
        return g.mid_col - half - 1
    return g.mid_col + half


def _exit_along(heading: Direction, g: GridGeometry) -> int:
    # Far enough past the edge that the centre lies beyond the margin.
    if heading is Direction.UP:
        return -(g.margin_tiles + 2)
    if heading is Direction.DOWN:
        return g.rows + g.margin_tiles + 1
    if heading is Direction.RIGHT:
        return g.cols + g.margin_tiles + 1
    return -(g.margin_tiles + 2)


def pivot_tile(direction: Direction, route: Route,
               geometry: GridGeometry = DEFAULT_GEOMETRY) -> Tile:
    """Tile where the entry lane crosses the exit lane."""
    src = entry_lane(direction, route, geometry)
    dst = exit_lane(direction, route, geometry)
    if src.axis is Axis.VERTICAL:
        return (src.index, dst.index)
    return (dst.index, src.index)


def compile_tiles(direction: Direction, route: Route,
                  geometry: GridGeometry = DEFAULT_GEOMETRY) -> Tuple[Tile, ...]:
    """Tile coordinates of the path for *(direction, route)*."""
    src = entry_lane(direction, route, geometry)
    spawn = _on_lane(src, _spawn_along(direction, geometry))
    edge = _on_lane(src, _box_edge_along(direction, geometry))
    if route is Route.STRAIGHT:
        return (spawn, edge, _on_lane(src, _exit_along(direction, geometry)))
    heading = exit_heading(direction, route)
    dst = exit_lane(direction, route, geometry)
    return (
        spawn,
        edge,
        pivot_tile(direction, route, geometry),
        _on_lane(dst, _exit_along(heading, geometry)),
    )


def compile_path(direction: Direction, route: Route,
                 geometry: GridGeometry = DEFAULT_GEOMETRY) -> Path:
    """Compile the waypoint path (tile centres) for *(direction, route)*.

    Pure and deterministic; always returns 3 waypoints for
    :attr:`Route.STRAIGHT` and 4 for turns.
    """
    return tuple(
        geometry.tile_center(col, row)
        for col, row in compile_tiles(direction, route, geometry)
    )
