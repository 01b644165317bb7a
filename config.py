#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Values can be overridden via environment variables (see :mod:`main`).
This module is a thin, import-safe leaf; it never imports from
other project packages.  Physics constants live in
:class:`sim.traffic_policy.MotionPolicy`.
"""

# ── Simulation defaults ──────────────────────────────────────────────────────
DEFAULT_TICK_RATE_HZ: float = 60.0
DEFAULT_VELOCITY_LEVEL: str = "MEDIUM"
DEFAULT_SEED = None

# ── Headless runs ────────────────────────────────────────────────────────────
DEFAULT_HEADLESS_DURATION_S: float = 30.0
HEADLESS_AUTO_SPAWN: bool = True

# ── UI defaults ──────────────────────────────────────────────────────────────
WINDOW_TITLE: str = "SMART ROAD"
HUD_WIDTH: int = 260
TARGET_FPS: int = 60

# ── Logging ──────────────────────────────────────────────────────────────────
LOG_FILE: str = "smart_road.log"
WORLD_DEBUG_LOG_FILE: str = "world_debug.log"
DEFAULT_LOG_LEVEL: str = "INFO"
