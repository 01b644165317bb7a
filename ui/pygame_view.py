#!/usr/bin/env python3
"""
Main view class: combines all UI mixins into one runnable Pygame window.

Module layout
─────────────
    ui/
    ├── types.py           – ColorRGB, ColorRGBA, VehicleRenderState, HudLine
    ├── constants.py       – ViewConstants mixin (all class-level constants)
    ├── helpers.py         – ViewHelpers mixin  (fonts, text, alpha, angles)
    ├── draw_road.py       – RoadRenderer mixin (tile map, lanes, stop lines)
    ├── draw_vehicles.py   – VehicleRenderer mixin (sprites, corridors, paths)
    ├── hud.py             – HudRenderer mixin  (HUD, legend, debug, splash)
    └── pygame_view.py     – PygameIntersectionView (this file – main loop)
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Dict, Optional

import pygame

import config
from sim.routes import Direction
from sim.traffic_policy import VelocityLevel
from sim.world import World

from .constants import ViewConstants
from .draw_road import RoadRenderer
from .draw_vehicles import VehicleRenderer
from .helpers import ViewHelpers
from .hud import HudRenderer
from .types import VehicleRenderState

log = logging.getLogger("ui")

_SPAWN_KEYS: Dict[int, Direction] = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
}

_VELOCITY_KEYS: Dict[int, VelocityLevel] = {
    pygame.K_1: VelocityLevel.SLOW,
    pygame.K_2: VelocityLevel.MEDIUM,
    pygame.K_3: VelocityLevel.FAST,
}


class PygameIntersectionView(
    ViewConstants,
    ViewHelpers,
    RoadRenderer,
    VehicleRenderer,
    HudRenderer,
):
    """Smart-road visualiser powered by Pygame.

    Inherits drawing logic from focused mixin modules so each file
    stays small and single-purpose.  The view owns the frame clock and
    drives :meth:`World.tick` once per frame.
    """

    def __init__(self, world: World, fps: int = config.TARGET_FPS, hud_width: int = config.HUD_WIDTH):
        self.world = world
        self.geometry = world.geometry
        self.fps = fps
        self.hud_width = hud_width
        self.width = self.geometry.width + hud_width
        self.height = self.geometry.height

        self.screen: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None
        self.font_small: Optional[pygame.font.Font] = None
        self.font_tiny: Optional[pygame.font.Font] = None
        self.font_title: Optional[pygame.font.Font] = None

        self.time_seconds = 0.0
        self.vehicle_states: Dict[int, VehicleRenderState] = {}
        self._background = None

        # UI state
        self.paused = False
        self.show_debug = False
        self.show_splash = True
        self._screenshot_flash_until = 0.0

    # ------------------------------------------------------------------ #
    #  Screenshot                                                          #
    # ------------------------------------------------------------------ #
    def _take_screenshot(self) -> None:
        if self.screen is None:
            return
        os.makedirs(self.SCREENSHOT_DIR, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = os.path.join(self.SCREENSHOT_DIR, f"smart_road_{stamp}.png")
        pygame.image.save(self.screen, path)
        self._screenshot_flash_until = self.time_seconds + 0.35
        log.info("Screenshot saved to %s", path)

    # ------------------------------------------------------------------ #
    #  Input                                                               #
    # ------------------------------------------------------------------ #
    def _handle_key(self, key: int) -> bool:
        """Apply one key press; returns False when the window should close."""
        if key == pygame.K_ESCAPE:
            return False
        if key in _SPAWN_KEYS:
            direction = _SPAWN_KEYS[key]
            vehicle = self.world.spawn(direction)
            if vehicle is None:
                log.debug("Spawn from %s blocked", direction.value)
        elif key in _VELOCITY_KEYS:
            self.world.set_velocity_level(_VELOCITY_KEYS[key])
        elif key == pygame.K_r:
            self.world.set_auto_spawn(not self.world.auto_spawn)
        elif key == pygame.K_SPACE:
            self.paused = not self.paused
        elif key == pygame.K_F3:
            self.show_debug = not self.show_debug
        elif key == pygame.K_F12:
            self._take_screenshot()
        return True

    # ------------------------------------------------------------------ #
    #  Main loop                                                           #
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        pygame.init()
        pygame.display.set_caption(config.WINDOW_TITLE)
        self.screen = pygame.display.set_mode((self.width, self.height))
        self.clock = pygame.time.Clock()
        self.font_small = self._load_font(15, bold=True)
        self.font_tiny = self._load_font(12, bold=False)
        self.font_title = self._load_font(28, bold=True)

        running = True
        try:
            while running:
                delta_time = self.clock.tick(self.fps) / 1000.0
                self.time_seconds += delta_time

                # ---- events --------------------------------------------- #
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN:
                        if self.show_splash:
                            self.show_splash = False
                            if event.key == pygame.K_ESCAPE:
                                running = False
                            continue
                        if not self._handle_key(event.key):
                            running = False

                # ---- splash --------------------------------------------- #
                if self.show_splash:
                    self.screen.fill(self.BG_COLOR)
                    self._draw_splash(self.screen, self.time_seconds)
                    pygame.display.flip()
                    continue

                # ---- simulation tick ------------------------------------ #
                if not self.paused:
                    self.world.tick(delta_time)
                self._sync_vehicle_states(self.world.vehicles)
                states = list(self.vehicle_states.values())

                # ---- render --------------------------------------------- #
                self.screen.fill(self.BG_COLOR)
                self.draw_road(self.screen)

                if self.show_debug:
                    self.draw_tile_grid(self.screen)
                    for vehicle in self.world.vehicles:
                        self.draw_planned_path(self.screen, vehicle)
                    for state in states:
                        self.draw_safety_corridor(self.screen, state)

                for state in states:
                    self.draw_vehicle(self.screen, state)

                self.draw_hud(self.screen, states, self.time_seconds)
                if self.show_debug:
                    self._draw_debug_overlay(self.screen, states, delta_time)
                if self.paused:
                    self._draw_pause_banner(self.screen)
                if self.time_seconds < self._screenshot_flash_until:
                    flash = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
                    flash.fill((255, 255, 255, 40))
                    self.screen.blit(flash, (0, 0))

                pygame.display.flip()
        finally:
            pygame.quit()


# ---------------------------------------------------------------------- #
#  Convenience entry point                                                 #
# ---------------------------------------------------------------------- #
def run_pygame_view(world: World, fps: int = config.TARGET_FPS) -> None:
    view = PygameIntersectionView(world=world, fps=fps)
    view.run()


if __name__ == "__main__":
    raise SystemExit(
        "pygame_view.py needs a World. Run `python main.py` "
        "or call run_pygame_view(World())."
    )
