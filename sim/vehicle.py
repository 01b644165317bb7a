#!/usr/bin/env python3
"""
sim/vehicle.py
==============
A single autonomous vehicle following a compiled waypoint path.

Each tick :meth:`Vehicle.update` regulates the target speed against the
peers ahead in the same corridor, integrates speed with a bounded
acceleration, chases the next waypoint and keeps the intersection
occupancy counters.  A vehicle only ever mutates itself; peers are read
through a snapshot.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from sim.grid import DEFAULT_GEOMETRY, GridGeometry, Point
from sim.physics import EPSILON, approach, facing_of, forward_lateral
from sim.routes import Direction, Path, Route, compile_path
from sim.traffic_policy import DEFAULT_POLICY, MotionPolicy, VelocityLevel

log = logging.getLogger("vehicle")


class Regulation(Enum):
    """Verdict of the traffic regulator for the current tick."""

    CLEAR = "CLEAR"
    CAUTION = "CAUTION"
    EMERGENCY = "EMERGENCY"


@dataclass(frozen=True)
class VehicleState:
    """Read-only view of a vehicle taken before a tick."""

    vehicle_id: int
    x: float
    y: float
    speed: float
    facing: Direction
    appearance_tag: int = 0


@dataclass(eq=False)
class Vehicle:
    """A vehicle entity.

    Equality is identity: two vehicles may share a position for a moment
    and must still be told apart.

    Attributes
    ----------
    vehicle_id : int
        Unique identifier assigned by the spawner.
    direction : Direction
        Heading at spawn.
    route : Route
        Turn choice.
    appearance_tag : int
        Opaque tag for the renderer.
    velocity_level : VelocityLevel
        Baseline speed tier absent interference.
    path : tuple of (x, y)
        Compiled waypoints; compiled from *direction*/*route* when omitted.
    speed : float or None
        Initial speed; defaults to the baseline tier speed.
    current_target : int
        Index of the waypoint being approached.
    """

    vehicle_id: int
    direction: Direction
    route: Route
    appearance_tag: int = 0
    velocity_level: VelocityLevel = VelocityLevel.MEDIUM
    policy: MotionPolicy = field(default=DEFAULT_POLICY, repr=False)
    geometry: GridGeometry = field(default=DEFAULT_GEOMETRY, repr=False)
    path: Optional[Path] = field(default=None, repr=False)
    speed: Optional[float] = None
    target_speed: float = 0.0
    x: float = 0.0
    y: float = 0.0
    current_target: int = 1

    # Lifecycle counters
    distance_travelled: float = field(default=0.0, repr=False)
    time_alive_s: float = field(default=0.0, repr=False)
    intersection_entered_s: Optional[float] = field(default=None, repr=False)
    intersection_exited_s: Optional[float] = field(default=None, repr=False)
    in_intersection: bool = field(default=False, repr=False)
    regulation: Regulation = field(default=Regulation.CLEAR, repr=False)
    close_calls: int = field(default=0, repr=False)
    peak_speed: float = field(default=0.0, repr=False)

    def __post_init__(self) -> None:
        if self.path is None:
            self.path = compile_path(self.direction, self.route, self.geometry)
        else:
            self.path = tuple((float(px), float(py)) for px, py in self.path)
        if not self.path:
            raise ValueError(f"vehicle {self.vehicle_id}: compiled path is empty")
        self.x, self.y = self.path[0]
        baseline = self.policy.speed_for(self.velocity_level)
        if self.speed is None:
            self.speed = baseline
        self.speed = max(0.0, float(self.speed))
        self.target_speed = baseline
        self.peak_speed = self.speed
        self.in_intersection = self.geometry.in_intersection(self.x, self.y)

    # ── derived state ─────────────────────────────────────────────────────

    @property
    def finished(self) -> bool:
        """True once every waypoint has been reached."""
        return self.current_target >= len(self.path)

    @property
    def next_waypoint(self) -> Optional[Point]:
        if self.finished:
            return None
        return self.path[self.current_target]

    @property
    def facing(self) -> Direction:
        """Cardinal direction toward the next waypoint.

        Skips waypoints the vehicle is sitting on; once the path is
        exhausted the last segment's direction is kept.
        """
        for wx, wy in self.path[self.current_target:]:
            dx, dy = wx - self.x, wy - self.y
            if abs(dx) > EPSILON or abs(dy) > EPSILON:
                return facing_of(dx, dy)
        for i in range(len(self.path) - 1, 0, -1):
            (ax, ay), (bx, by) = self.path[i - 1], self.path[i]
            if abs(bx - ax) > EPSILON or abs(by - ay) > EPSILON:
                return facing_of(bx - ax, by - ay)
        return self.direction

    @property
    def intersection_time_s(self) -> Optional[float]:
        """Seconds spent crossing the intersection box, once known."""
        if self.intersection_entered_s is None or self.intersection_exited_s is None:
            return None
        return self.intersection_exited_s - self.intersection_entered_s

    def is_out_of_bounds(self) -> bool:
        """True once the vehicle is beyond the playfield plus the margin."""
        return self.geometry.is_out_of_bounds(self.x, self.y)

    # ── control ───────────────────────────────────────────────────────────

    def set_velocity_level(self, level: VelocityLevel) -> None:
        """Change the baseline tier.

        A vehicle currently held back by the regulator keeps its reduced
        target until the obstruction clears.
        """
        self.velocity_level = level
        if self.regulation is Regulation.CLEAR:
            self.target_speed = self.policy.speed_for(level)

    def gap_ahead(self, peers: Sequence[Any]) -> Optional[float]:
        """Forward distance to the nearest peer ahead in this vehicle's corridor.

        Crossing traffic is ordered by spawn: a peer on a perpendicular
        heading with a higher ``vehicle_id`` is not an obstacle, so only
        the later of two crossing vehicles waits.
        """
        facing = self.facing
        nearest: Optional[float] = None
        for peer in peers:
            if peer is self or peer.vehicle_id == self.vehicle_id:
                continue
            forward, lateral = forward_lateral(peer.x - self.x, peer.y - self.y, facing)
            if forward <= 0.0 or lateral > self.policy.corridor_half_width:
                continue
            if self._has_priority_over(peer, facing):
                continue
            if nearest is None or forward < nearest:
                nearest = forward
        return nearest

    def _has_priority_over(self, peer: Any, facing: Direction) -> bool:
        crossing = peer.facing.is_vertical != facing.is_vertical
        return crossing and peer.vehicle_id > self.vehicle_id

    def _regulate(self, peers: Sequence[Any]) -> None:
        baseline = self.policy.speed_for(self.velocity_level)
        gap = self.gap_ahead(peers)
        previous = self.regulation
        if gap is not None and gap <= self.policy.emergency_distance:
            self.regulation = Regulation.EMERGENCY
            self.target_speed = 0.0
        elif gap is not None and gap <= self.policy.safety_distance:
            self.regulation = Regulation.CAUTION
            self.target_speed = min(self.policy.caution_speed, baseline)
        else:
            self.regulation = Regulation.CLEAR
            self.target_speed = baseline
        if self.regulation is Regulation.EMERGENCY and previous is not Regulation.EMERGENCY:
            self.close_calls += 1
            log.debug("vehicle %d emergency stop, gap=%.1f", self.vehicle_id, gap)

    # ── tick ──────────────────────────────────────────────────────────────

    def update(self, dt: float, peers: Sequence[Any]) -> None:
        """Advance one tick of *dt* seconds against a read-only *peers* view."""
        if dt <= 0.0:
            raise ValueError(f"dt must be positive, got {dt}")
        if self.finished:
            return
        self.time_alive_s += dt

        self._regulate(peers)
        self.speed = approach(self.speed, self.target_speed,
                              self.policy.acceleration_rate * dt)
        self.peak_speed = max(self.peak_speed, self.speed)

        tx, ty = self.next_waypoint
        dx, dy = tx - self.x, ty - self.y
        dist = math.hypot(dx, dy)
        step = self.speed * dt
        if dist <= EPSILON or dist < step:
            # Would overshoot: take the waypoint and drop the rest of the step.
            self.current_target += 1
        else:
            self.x += dx / dist * step
            self.y += dy / dist * step
            self.distance_travelled += step

        self._track_intersection()

    def _track_intersection(self) -> None:
        inside = self.geometry.in_intersection(self.x, self.y)
        if inside and not self.in_intersection and self.intersection_entered_s is None:
            self.intersection_entered_s = self.time_alive_s
        elif not inside and self.in_intersection and self.intersection_exited_s is None:
            self.intersection_exited_s = self.time_alive_s
        self.in_intersection = inside

    # ── views ─────────────────────────────────────────────────────────────

    def snapshot(self) -> VehicleState:
        return VehicleState(
            vehicle_id=self.vehicle_id,
            x=self.x,
            y=self.y,
            speed=self.speed,
            facing=self.facing,
            appearance_tag=self.appearance_tag,
        )

    def as_dict(self) -> Dict[str, Any]:
        """Serialisable mapping for logs and the HUD."""
        return {
            "id": self.vehicle_id,
            "x": self.x,
            "y": self.y,
            "speed": self.speed,
            "target_speed": self.target_speed,
            "direction": self.direction.value,
            "route": self.route.value,
            "facing": self.facing.value,
            "regulation": self.regulation.value,
            "target": self.current_target,
        }
