#!/usr/bin/env python3
"""
sim/world.py
============
Entity-based intersection world.

This module owns the flat list of active :class:`~sim.vehicle.Vehicle`
entities and the fixed-tick loop.  Every tick follows the same
discipline:

1. optional random spawn;
2. one read-only snapshot of every vehicle;
3. each vehicle updates itself against the snapshot minus its own entry;
4. vehicles that left the expanded playfield are removed and reported
   to :class:`~sim.stats.TrafficStats`.

Because every update reads the same snapshot, the result does not depend
on iteration order.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from sim.grid import DEFAULT_GEOMETRY, GridGeometry
from sim.routes import Direction, Route
from sim.spawner import Spawner
from sim.stats import TrafficStats
from sim.traffic_policy import DEFAULT_POLICY, MotionPolicy, VelocityLevel
from sim.vehicle import Vehicle, VehicleState

log = logging.getLogger("world")


class World:
    """Single-intersection scenario.

    Parameters
    ----------
    geometry : GridGeometry or None
        Tile grid; uses :data:`~sim.grid.DEFAULT_GEOMETRY` when *None*.
    policy : MotionPolicy or None
        Tunable constants; uses defaults when *None*.
    seed : int or None
        Random seed for reproducible random spawns.
    velocity_level : VelocityLevel
        Initial global velocity level.
    """

    def __init__(
        self,
        geometry: Optional[GridGeometry] = None,
        policy: Optional[MotionPolicy] = None,
        seed: Optional[int] = None,
        velocity_level: VelocityLevel = VelocityLevel.MEDIUM,
    ) -> None:
        self.geometry = geometry or DEFAULT_GEOMETRY
        self.policy = policy or DEFAULT_POLICY
        self._seed = seed
        self._init_state(velocity_level)

    # ── initialisation / reset ────────────────────────────────────────────

    def _init_state(self, velocity_level: VelocityLevel) -> None:
        self.stats = TrafficStats()
        self.spawner = Spawner(self.geometry, self.policy, self.stats, seed=self._seed)
        self.vehicles: List[Vehicle] = []
        self.elapsed_s: float = 0.0
        self.auto_spawn: bool = False
        self._spawn_timer_s: float = 0.0
        self._tick_count: int = 0
        self.velocity_level = velocity_level
        self.spawner.velocity_level = velocity_level

    def reset(self) -> None:
        """Drop every vehicle and start a fresh statistics run."""
        self._init_state(self.velocity_level)
        log.info("world reset")

    # ── queries ───────────────────────────────────────────────────────────

    def all_vehicles(self) -> List[Vehicle]:
        return list(self.vehicles)

    def snapshot(self) -> Tuple[VehicleState, ...]:
        """Immutable view of every active vehicle."""
        return tuple(v.snapshot() for v in self.vehicles)

    # ── spawning ──────────────────────────────────────────────────────────

    def spawn(
        self,
        direction: Direction,
        route: Optional[Route] = None,
        appearance_tag: Optional[int] = None,
    ) -> Optional[Vehicle]:
        """Admit one vehicle; *route* and *appearance_tag* are random when omitted.

        Returns ``None`` when the entry lane is blocked.
        """
        if route is None:
            route = self.spawner.random_route()
        if appearance_tag is None:
            appearance_tag = self.spawner.random_tag()
        vehicle = self.spawner.new_vehicle(direction, route, appearance_tag, self.vehicles)
        if vehicle is not None:
            self.vehicles.append(vehicle)
        return vehicle

    def spawn_random(self) -> Optional[Vehicle]:
        vehicle = self.spawner.random_vehicle(self.vehicles)
        if vehicle is not None:
            self.vehicles.append(vehicle)
        return vehicle

    def set_auto_spawn(self, enabled: bool) -> None:
        self.auto_spawn = enabled
        self._spawn_timer_s = 0.0
        log.info("auto spawn %s", "on" if enabled else "off")

    # ── global control ────────────────────────────────────────────────────

    def set_velocity_level(self, level: VelocityLevel) -> None:
        """Broadcast a new baseline tier to every vehicle and to future spawns."""
        self.velocity_level = level
        self.spawner.velocity_level = level
        for vehicle in self.vehicles:
            vehicle.set_velocity_level(level)
        log.info("velocity level -> %s", level.value)

    # ── physics tick ──────────────────────────────────────────────────────

    def tick(self, dt: float) -> List[Vehicle]:
        """Advance the world by *dt* seconds; returns the vehicles removed this tick."""
        if dt <= 0.0:
            return []
        dt = min(dt, self.policy.max_tick_s)
        self._tick_count += 1
        self.elapsed_s += dt
        self.stats.record_runtime(dt)

        if self.auto_spawn:
            self._spawn_timer_s += dt
            if self._spawn_timer_s >= self.policy.auto_spawn_interval_s:
                self._spawn_timer_s = 0.0
                self.spawn_random()

        frozen = self.snapshot()
        for idx, vehicle in enumerate(self.vehicles):
            peers = frozen[:idx] + frozen[idx + 1:]
            vehicle.update(dt, peers)

        removed = self._remove_out_of_bounds()

        if self._tick_count % self.policy.debug_dump_every == 1:
            self._debug_dump()
        return removed

    def _remove_out_of_bounds(self) -> List[Vehicle]:
        kept: List[Vehicle] = []
        removed: List[Vehicle] = []
        for vehicle in self.vehicles:
            if vehicle.is_out_of_bounds():
                removed.append(vehicle)
                self.stats.record_exit(vehicle)
                log.debug(
                    "vehicle %d left after %.2f s, %.0f px, crossing=%s",
                    vehicle.vehicle_id, vehicle.time_alive_s,
                    vehicle.distance_travelled, vehicle.intersection_time_s,
                )
            else:
                kept.append(vehicle)
        self.vehicles = kept
        return removed

    def _debug_dump(self) -> None:
        if not log.isEnabledFor(logging.DEBUG):
            return
        log.debug("=== TICK %d  t=%.2f  vehicles=%d ===",
                  self._tick_count, self.elapsed_s, len(self.vehicles))
        for vehicle in self.vehicles:
            d: Dict[str, Any] = vehicle.as_dict()
            log.debug(
                "  %d pos=(%.1f,%.1f) spd=%.1f tgt=%.1f %s/%s facing=%s reg=%s wp=%d",
                d["id"], d["x"], d["y"], d["speed"], d["target_speed"],
                d["direction"], d["route"], d["facing"], d["regulation"], d["target"],
            )
