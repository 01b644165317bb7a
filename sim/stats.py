#!/usr/bin/env python3
"""
sim/stats.py
============
Traffic statistics collected from vehicle lifecycle events.

The spawner reports spawn-time tallies, the world reports every vehicle
it removes, and :meth:`TrafficStats.summary` reduces the raw samples into
a frozen :class:`StatsSummary`.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from sim.routes import Direction, Route

log = logging.getLogger("stats")

# Report distances in metres.
PIXELS_PER_METER: float = 10.0


@dataclass(frozen=True)
class StatsSummary:
    total_spawned: int
    total_exited: int
    rejected_spawns: int
    by_direction: Dict[Direction, int]
    by_route: Dict[Route, int]
    runtime_s: float
    total_distance_px: float
    avg_distance_px: float
    avg_intersection_time_s: Optional[float]
    min_intersection_time_s: Optional[float]
    max_intersection_time_s: Optional[float]
    avg_time_in_system_s: Optional[float]
    peak_speed: float
    close_calls: int


@dataclass
class TrafficStats:
    """Mutable collector; one per simulation run."""

    by_direction: Counter = field(default_factory=Counter)
    by_route: Counter = field(default_factory=Counter)
    rejected_by_direction: Counter = field(default_factory=Counter)
    runtime_s: float = 0.0

    distances: List[float] = field(default_factory=list)
    intersection_times: List[float] = field(default_factory=list)
    times_in_system: List[float] = field(default_factory=list)
    peak_speeds: List[float] = field(default_factory=list)
    close_calls: int = 0

    # ── recording ─────────────────────────────────────────────────────────

    def record_spawn(self, vehicle: Any) -> None:
        self.by_direction[vehicle.direction] += 1
        self.by_route[vehicle.route] += 1

    def record_rejection(self, direction: Direction) -> None:
        self.rejected_by_direction[direction] += 1

    def record_runtime(self, dt: float) -> None:
        self.runtime_s += dt

    def record_exit(self, vehicle: Any) -> None:
        """Store the lifetime counters of a vehicle leaving the simulation."""
        self.distances.append(vehicle.distance_travelled)
        self.times_in_system.append(vehicle.time_alive_s)
        self.peak_speeds.append(vehicle.peak_speed)
        self.close_calls += vehicle.close_calls
        crossing = vehicle.intersection_time_s
        if crossing is not None:
            self.intersection_times.append(crossing)

    # ── derived ───────────────────────────────────────────────────────────

    @property
    def total_spawned(self) -> int:
        return sum(self.by_direction.values())

    @property
    def total_exited(self) -> int:
        return len(self.distances)

    @property
    def rejected_spawns(self) -> int:
        return sum(self.rejected_by_direction.values())

    def summary(self) -> StatsSummary:
        """Reduce the raw samples into a :class:`StatsSummary`."""
        distances = np.asarray(self.distances, dtype=float)
        crossings = np.asarray(self.intersection_times, dtype=float)
        lifetimes = np.asarray(self.times_in_system, dtype=float)
        peaks = np.asarray(self.peak_speeds, dtype=float)

        total_distance = float(distances.sum()) if distances.size else 0.0
        return StatsSummary(
            total_spawned=self.total_spawned,
            total_exited=self.total_exited,
            rejected_spawns=self.rejected_spawns,
            by_direction={d: self.by_direction.get(d, 0) for d in Direction},
            by_route={r: self.by_route.get(r, 0) for r in Route},
            runtime_s=self.runtime_s,
            total_distance_px=total_distance,
            avg_distance_px=float(distances.mean()) if distances.size else 0.0,
            avg_intersection_time_s=float(crossings.mean()) if crossings.size else None,
            min_intersection_time_s=float(crossings.min()) if crossings.size else None,
            max_intersection_time_s=float(crossings.max()) if crossings.size else None,
            avg_time_in_system_s=float(lifetimes.mean()) if lifetimes.size else None,
            peak_speed=float(peaks.max()) if peaks.size else 0.0,
            close_calls=self.close_calls,
        )

    def report_lines(self) -> List[str]:
        """Human-readable final report, one line per entry."""
        s = self.summary()
        lines = [
            f"Runtime: {s.runtime_s:.2f} s",
            "Directions: " + "  ".join(
                f"{d.value}={s.by_direction[d]}" for d in Direction
            ),
            "Routes: " + "  ".join(f"{r.value}={s.by_route[r]}" for r in Route),
            f"Vehicles spawned: {s.total_spawned}  exited: {s.total_exited}  "
            f"rejected: {s.rejected_spawns}",
            f"Total distance travelled: {s.total_distance_px / PIXELS_PER_METER:.2f} m",
        ]
        if s.total_exited:
            lines.append(
                f"Avg distance per vehicle: {s.avg_distance_px / PIXELS_PER_METER:.2f} m"
            )
        if s.avg_intersection_time_s is not None:
            lines.append(
                f"Intersection time: avg {s.avg_intersection_time_s:.2f} s  "
                f"min {s.min_intersection_time_s:.2f} s  max {s.max_intersection_time_s:.2f} s"
            )
        if s.avg_time_in_system_s is not None:
            lines.append(f"Avg time in system: {s.avg_time_in_system_s:.2f} s")
        lines.append(f"Peak speed: {s.peak_speed / PIXELS_PER_METER:.1f} m/s")
        lines.append(f"Collisions avoided: {s.close_calls}")
        return lines

    def log_report(self) -> None:
        log.info("==== FINAL SIMULATION STATISTICS ====")
        for line in self.report_lines():
            log.info(line)
