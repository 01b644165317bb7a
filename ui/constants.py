#!/usr/bin/env python3
"""Visual constants shared across all renderers."""

from __future__ import annotations

from typing import Dict, Sequence, Tuple

from .types import ColorRGB


class ViewConstants:
    """Mixin providing every visual / layout constant."""

    BG_COLOR: ColorRGB = (15, 15, 15)
    GRASS_COLOR: ColorRGB = (38, 74, 44)
    GRASS_DARK_COLOR: ColorRGB = (32, 64, 38)
    ROAD_COLOR: ColorRGB = (45, 45, 45)
    BOX_COLOR: ColorRGB = (52, 52, 52)
    LANE_DASH_COLOR: ColorRGB = (200, 200, 200)
    CENTER_LINE_COLOR: ColorRGB = (230, 190, 60)
    STOP_LINE_COLOR: ColorRGB = (235, 235, 235)
    GRID_COLOR: ColorRGB = (60, 60, 60)
    HUD_BG_COLOR: ColorRGB = (22, 22, 22)
    HUD_BORDER_COLOR: ColorRGB = (42, 42, 42)
    HUD_TEXT_COLOR: ColorRGB = (220, 220, 220)
    HUD_DIM_COLOR: ColorRGB = (120, 120, 120)
    WARNING_COLOR: ColorRGB = (255, 60, 60)
    GO_COLOR: ColorRGB = (0, 255, 127)

    REGULATION_COLORS: Dict[str, ColorRGB] = {
        "CLEAR": (0, 255, 127),
        "CAUTION": (255, 136, 0),
        "EMERGENCY": (255, 60, 60),
    }

    CORRIDOR_ALPHA = 60
    HUD_BLINK_MS = 500

    DASH_LEN = 15
    DASH_GAP = 15
    VEHICLE_LENGTH_RATIO = 0.8   # of tile size
    VEHICLE_WIDTH_RATIO = 0.5

    DEFAULT_VEHICLE_COLORS: Sequence[ColorRGB] = (
        (86, 168, 255),
        (255, 88, 88),
        (100, 226, 170),
        (246, 191, 90),
        (180, 120, 255),
        (255, 160, 100),
    )

    LEGEND_ITEMS: Sequence[Tuple[str, ColorRGB]] = (
        ("CLEAR", (0, 255, 127)),
        ("CAUTION", (255, 136, 0)),
        ("EMERGENCY", (255, 60, 60)),
    )

    CONTROLS: Sequence[str] = (
        "ARROWS Spawn from side",
        "R      Random spawning",
        "1/2/3  Slow/Medium/Fast",
        "SPACE  Pause/Resume",
        "F3     Debug overlay",
        "ESC    Quit + report",
    )

    SCREENSHOT_DIR = "screenshots"
