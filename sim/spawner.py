#!/usr/bin/env python3
"""
sim/spawner.py
==============
Admission control for new vehicles.

:class:`Spawner` hands out vehicle ids, compiles the path for a requested
``(direction, route)`` and refuses to place a vehicle whose start point
lies within ``policy.spawn_clearance`` of any existing vehicle.
"""

from __future__ import annotations

import itertools
import logging
import math
import random
from typing import Iterable, Optional

from sim.grid import DEFAULT_GEOMETRY, GridGeometry
from sim.routes import Direction, Route, compile_path
from sim.stats import TrafficStats
from sim.traffic_policy import DEFAULT_POLICY, MotionPolicy, VelocityLevel
from sim.vehicle import Vehicle

log = logging.getLogger("spawner")

_DIRECTIONS = tuple(Direction)
_ROUTES = tuple(Route)

# Number of distinct appearance tags the renderer knows about.
APPEARANCE_TAGS: int = 6


class Spawner:
    """Creates vehicles at their entry lanes.

    Parameters
    ----------
    geometry : GridGeometry or None
        Tile grid; defaults to :data:`~sim.grid.DEFAULT_GEOMETRY`.
    policy : MotionPolicy or None
        Tunable constants; uses defaults when *None*.
    stats : TrafficStats or None
        Receives spawn and rejection tallies.
    seed : int or None
        Seed for :meth:`random_vehicle`.
    """

    def __init__(
        self,
        geometry: Optional[GridGeometry] = None,
        policy: Optional[MotionPolicy] = None,
        stats: Optional[TrafficStats] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.geometry = geometry or DEFAULT_GEOMETRY
        self.policy = policy or DEFAULT_POLICY
        self.stats = stats
        self._rng = random.Random(seed)
        self._ids = itertools.count()
        self.velocity_level = VelocityLevel.MEDIUM

    def is_clear(self, x: float, y: float, existing: Iterable[Vehicle]) -> bool:
        """True when no vehicle in *existing* sits within the spawn clearance of *(x, y)*."""
        for vehicle in existing:
            if math.hypot(vehicle.x - x, vehicle.y - y) < self.policy.spawn_clearance:
                return False
        return True

    def new_vehicle(
        self,
        direction: Direction,
        route: Route,
        appearance_tag: int,
        existing: Iterable[Vehicle] = (),
    ) -> Optional[Vehicle]:
        """Build a vehicle for *(direction, route)*, or ``None`` if its lane is blocked."""
        path = compile_path(direction, route, self.geometry)
        sx, sy = path[0]
        if not self.is_clear(sx, sy, existing):
            log.debug("spawn rejected: %s/%s blocked at (%.0f, %.0f)",
                      direction.value, route.value, sx, sy)
            if self.stats is not None:
                self.stats.record_rejection(direction)
            return None

        vehicle = Vehicle(
            vehicle_id=next(self._ids),
            direction=direction,
            route=route,
            appearance_tag=appearance_tag,
            velocity_level=self.velocity_level,
            policy=self.policy,
            geometry=self.geometry,
            path=path,
        )
        if self.stats is not None:
            self.stats.record_spawn(vehicle)
        log.debug("spawned vehicle %d %s/%s tag=%d",
                  vehicle.vehicle_id, direction.value, route.value, appearance_tag)
        return vehicle

    def random_route(self) -> Route:
        return self._rng.choice(_ROUTES)

    def random_tag(self) -> int:
        return self._rng.randrange(APPEARANCE_TAGS)

    def random_vehicle(self, existing: Iterable[Vehicle] = ()) -> Optional[Vehicle]:
        """Spawn on a random entry lane with a random appearance tag."""
        direction = self._rng.choice(_DIRECTIONS)
        return self.new_vehicle(direction, self.random_route(), self.random_tag(), existing)
