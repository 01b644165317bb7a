#!/usr/bin/env python3
"""
sim/traffic_policy.py
=====================
Tunable motion, safety and spawning parameters for the intersection
simulation.  Every constant lives in the frozen :class:`MotionPolicy`
dataclass so that experiments can swap policies without touching code.

Distances are in pixels, speeds in pixels per second.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sim.physics import stopping_distance


class VelocityLevel(Enum):
    """Baseline desired-speed tier, set globally."""

    SLOW = "SLOW"
    MEDIUM = "MEDIUM"
    FAST = "FAST"

    @classmethod
    def parse(cls, raw: str) -> "VelocityLevel":
        """Case-insensitive lookup (``"fast"`` → :attr:`FAST`)."""
        try:
            return cls[str(raw).strip().upper()]
        except KeyError:
            raise ValueError(f"unknown velocity level {raw!r}") from None


@dataclass(frozen=True)
class MotionPolicy:
    """Immutable bag of every tunable simulation parameter.

    Groups: speed tiers, longitudinal control, safety envelope,
    spawn envelope, tick discipline.
    """

    # ── Speed tiers ───────────────────────────────────────────────────────
    slow_speed: float = 60.0
    """Baseline speed for :attr:`VelocityLevel.SLOW`."""

    medium_speed: float = 120.0
    """Baseline speed for :attr:`VelocityLevel.MEDIUM`."""

    fast_speed: float = 180.0
    """Baseline speed for :attr:`VelocityLevel.FAST`."""

    caution_speed: float = 30.0
    """Reduced tier used while a peer is inside the safety distance."""

    # ── Longitudinal control ──────────────────────────────────────────────
    acceleration_rate: float = 480.0
    """Maximum change of speed per second, both accelerating and braking.

    High enough that a vehicle at :attr:`fast_speed` entering the safety
    distance is down to :attr:`caution_speed` before it reaches
    :attr:`emergency_distance`, one tick of travel at :attr:`max_tick_s`
    included.
    """

    # ── Safety envelope ───────────────────────────────────────────────────
    safety_distance: float = 90.0
    """Forward gap (centre to centre) below which a vehicle slows down."""

    corridor_half_width: float = 20.0
    """Lateral offset within which a peer counts as being in the same corridor.

    Must stay below the tile size so adjacent lanes are ignored.
    """

    # ── Spawn envelope ────────────────────────────────────────────────────
    spawn_clearance: float = 90.0
    """Minimum distance between a new vehicle's start point and any vehicle.

    Not below :attr:`safety_distance`, so a new vehicle always starts
    with the whole caution band ahead of it.
    """

    auto_spawn_interval_s: float = 0.6
    """Seconds between random spawns while auto-spawn is enabled."""

    # ── Tick discipline ───────────────────────────────────────────────────
    max_tick_s: float = 0.05
    """Upper clamp on dt so a slow frame cannot tunnel through the safety check."""

    debug_dump_every: int = 60
    """Ticks between debug dumps of the vehicle table."""

    @property
    def emergency_distance(self) -> float:
        """Gap below which a vehicle brakes to a full stop."""
        return self.safety_distance / 2.0

    @property
    def emergency_overshoot(self) -> float:
        """Worst-case travel past :attr:`emergency_distance` before standing still.

        A vehicle closing on a peer that was already ahead crosses into the
        emergency band at :attr:`caution_speed`, so it covers at most one
        tick at that speed plus its stopping distance.
        """
        return (self.caution_speed * self.max_tick_s
                + stopping_distance(self.caution_speed, self.acceleration_rate))

    def speed_for(self, level: VelocityLevel) -> float:
        """Baseline speed of *level*."""
        if level is VelocityLevel.SLOW:
            return self.slow_speed
        if level is VelocityLevel.FAST:
            return self.fast_speed
        return self.medium_speed


DEFAULT_POLICY = MotionPolicy()
