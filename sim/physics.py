#!/usr/bin/env python3
"""
sim/physics.py
==============
Low-level motion helpers used by :mod:`sim.vehicle`.

Keeping these in a separate module avoids circular imports and makes unit
testing straightforward.
"""

from __future__ import annotations

from typing import Tuple

from sim.routes import Direction

# Distances below this are treated as "already there".
EPSILON: float = 1e-9


def approach(value: float, target: float, max_delta: float) -> float:
    """Move *value* toward *target* by at most *max_delta*, never below zero."""
    if value < target:
        value = min(target, value + max_delta)
    elif value > target:
        value = max(target, value - max_delta)
    return max(0.0, value)


def stopping_distance(speed: float, rate: float) -> float:
    """Distance needed to reach zero speed under constant deceleration *rate*."""
    if rate <= 0.0:
        return float("inf") if speed > 0.0 else 0.0
    v = max(0.0, speed)
    return (v * v) / (2.0 * rate)


def facing_of(dx: float, dy: float) -> Direction:
    """Cardinal direction of the vector *(dx, dy)* in screen space.

    The axis with the larger magnitude wins.  Magnitude cannot split a
    diagonal (``|dx| == |dy|``), so ties always resolve to the horizontal
    axis; that fixed rule keeps the result deterministic.
    """
    if abs(dx) >= abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


def forward_lateral(rx: float, ry: float, facing: Direction) -> Tuple[float, float]:
    """Split the offset *(rx, ry)* into (forward, |lateral|) relative to *facing*.

    Positive forward → the point lies ahead.
    """
    ux, uy = facing.vector
    forward = rx * ux + ry * uy
    lateral = abs(rx * uy - ry * ux)
    return forward, lateral
