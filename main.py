#!/usr/bin/env python3
"""
main.py
=======
Entry point: builds a :class:`~sim.world.World` and drives it either
through the pygame window or headless for a fixed duration.

Environment overrides
---------------------
``SMART_ROAD_HEADLESS``    ``1`` runs without a window.
``SMART_ROAD_DURATION_S``  headless run length in simulated seconds.
``SMART_ROAD_SEED``        seed for random spawns.
``SMART_ROAD_VELOCITY``    initial velocity level (SLOW / MEDIUM / FAST).
``SMART_ROAD_LOG_LEVEL``   logging level name (DEBUG, INFO, ...).
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import config
from logging_setup import setup_logging
from sim.traffic_policy import VelocityLevel
from sim.world import World

log = logging.getLogger("main")

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _env_seed() -> Optional[int]:
    raw = os.environ.get("SMART_ROAD_SEED")
    if raw is None or not raw.strip():
        return config.DEFAULT_SEED
    return int(raw)


def run_headless(
    world: World,
    duration_s: float = config.DEFAULT_HEADLESS_DURATION_S,
    tick_rate_hz: float = config.DEFAULT_TICK_RATE_HZ,
    auto_spawn: bool = config.HEADLESS_AUTO_SPAWN,
) -> World:
    """Tick *world* at a fixed rate for *duration_s* simulated seconds."""
    if tick_rate_hz <= 0:
        raise ValueError(f"tick_rate_hz must be positive, got {tick_rate_hz}")
    dt = 1.0 / tick_rate_hz
    ticks = int(round(duration_s * tick_rate_hz))
    world.set_auto_spawn(auto_spawn)
    log.info("Headless run: %d ticks at %.0f Hz", ticks, tick_rate_hz)
    for _ in range(ticks):
        world.tick(dt)
    return world


def main() -> None:
    level_name = os.environ.get("SMART_ROAD_LOG_LEVEL", config.DEFAULT_LOG_LEVEL).upper()
    setup_logging(getattr(logging, level_name, logging.INFO))

    velocity = VelocityLevel.parse(
        os.environ.get("SMART_ROAD_VELOCITY", config.DEFAULT_VELOCITY_LEVEL)
    )
    world = World(seed=_env_seed(), velocity_level=velocity)
    log.info("Starting smart road (velocity=%s)", velocity.value)

    try:
        if _env_flag("SMART_ROAD_HEADLESS"):
            duration = float(
                os.environ.get("SMART_ROAD_DURATION_S", config.DEFAULT_HEADLESS_DURATION_S)
            )
            run_headless(world, duration_s=duration)
        else:
            from ui import run_pygame_view

            run_pygame_view(world, fps=config.TARGET_FPS)
    except KeyboardInterrupt:
        log.info("Shutting down...")
    except Exception:
        log.exception("Simulation aborted")
        raise
    finally:
        world.stats.log_report()


if __name__ == "__main__":
    main()
