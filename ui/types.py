"""
ui/types.py
===========
Lightweight data containers used across every UI module.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

ColorRGB = Tuple[int, int, int]
ColorRGBA = Tuple[int, int, int, int]


@dataclass
class VehicleRenderState:
    """Per-vehicle render data derived from one world snapshot."""
    vehicle_id: int
    x: float
    y: float
    facing: str
    color: ColorRGB
    regulation: str = "CLEAR"
    speed: float = 0.0


@dataclass
class HudLine:
    """One label/value row of the statistics panel."""
    label: str
    value: str
    color: ColorRGB = (220, 220, 220)
