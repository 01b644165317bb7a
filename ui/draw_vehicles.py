#!/usr/bin/env python3
"""Vehicle sprite rendering, safety corridors, planned paths and state sync (mixin)."""

from __future__ import annotations

from typing import Dict, Sequence

import pygame

from sim.vehicle import Vehicle

from .types import VehicleRenderState


class VehicleRenderer:
    """Mixin that draws vehicles and their debug overlays."""

    vehicle_states: Dict[int, VehicleRenderState]

    # ------------------------------------------------------------------ #
    #  Public draw methods                                                 #
    # ------------------------------------------------------------------ #

    def draw_vehicle(self, surface: pygame.Surface, state: VehicleRenderState) -> None:
        ts = self.geometry.tile_size
        w = max(6, int(ts * self.VEHICLE_LENGTH_RATIO))
        h = max(4, int(ts * self.VEHICLE_WIDTH_RATIO))
        sprite = pygame.Surface((w, h), pygame.SRCALPHA)

        # Body
        body = pygame.Rect(0, 0, w, h)
        pygame.draw.rect(sprite, state.color, body, border_radius=3)

        # Windshield
        ws_rect = pygame.Rect(w - 8, 2, 5, h - 4)
        r, g, b = state.color
        glass = (max(0, r - 60), max(0, g - 60), max(0, b - 60), 180)
        pygame.draw.rect(sprite, glass, ws_rect, border_radius=2)

        # Headlights
        hl_color = (255, 248, 200)
        pygame.draw.circle(sprite, hl_color, (w - 2, 3), 2)
        pygame.draw.circle(sprite, hl_color, (w - 2, h - 3), 2)

        # Brake lights while the regulator holds the vehicle back
        tl_color = self.REGULATION_COLORS.get(state.regulation, (200, 40, 40))
        if state.regulation == "CLEAR":
            tl_color = (120, 30, 30)
        pygame.draw.circle(sprite, tl_color, (2, 3), 2)
        pygame.draw.circle(sprite, tl_color, (2, h - 3), 2)

        # Border
        pygame.draw.rect(sprite, (235, 235, 235), body, width=1, border_radius=3)

        rotated = pygame.transform.rotate(sprite, self.facing_to_angle(state.facing))
        dest = rotated.get_rect(center=(int(state.x), int(state.y)))
        surface.blit(rotated, dest)

    def draw_safety_corridor(self, surface: pygame.Surface, state: VehicleRenderState) -> None:
        """Shade the strip ahead in which peers are checked."""
        policy = self.world.policy
        length = int(policy.safety_distance)
        half = int(policy.corridor_half_width)
        x, y = int(state.x), int(state.y)
        facing = state.facing
        if facing == "UP":
            rect = pygame.Rect(x - half, y - length, 2 * half, length)
        elif facing == "DOWN":
            rect = pygame.Rect(x - half, y, 2 * half, length)
        elif facing == "LEFT":
            rect = pygame.Rect(x - length, y - half, length, 2 * half)
        else:
            rect = pygame.Rect(x, y - half, length, 2 * half)
        color = self.REGULATION_COLORS.get(state.regulation, self.GO_COLOR)
        self.draw_alpha_rect(surface, (*color, self.CORRIDOR_ALPHA), rect)

    def draw_planned_path(self, surface: pygame.Surface, vehicle: Vehicle) -> None:
        """Polyline through the waypoints still ahead of *vehicle*."""
        remaining = vehicle.path[vehicle.current_target:]
        if not remaining:
            return
        points = [(int(vehicle.x), int(vehicle.y))]
        points.extend((int(px), int(py)) for px, py in remaining)
        color = self._vehicle_color(vehicle.appearance_tag)
        pygame.draw.lines(surface, color, False, points, 1)

    # ------------------------------------------------------------------ #
    #  Vehicle state management                                            #
    # ------------------------------------------------------------------ #

    def _sync_vehicle_states(self, vehicles: Sequence[Vehicle]) -> None:
        active_ids = set()
        for vehicle in vehicles:
            active_ids.add(vehicle.vehicle_id)
            state = self.vehicle_states.get(vehicle.vehicle_id)
            if state is None:
                state = VehicleRenderState(
                    vehicle_id=vehicle.vehicle_id,
                    x=vehicle.x,
                    y=vehicle.y,
                    facing=vehicle.facing.value,
                    color=self._vehicle_color(vehicle.appearance_tag),
                )
                self.vehicle_states[vehicle.vehicle_id] = state
            state.x = vehicle.x
            state.y = vehicle.y
            state.facing = vehicle.facing.value
            state.regulation = vehicle.regulation.value
            state.speed = vehicle.speed

        stale_ids = [vid for vid in self.vehicle_states if vid not in active_ids]
        for vid in stale_ids:
            del self.vehicle_states[vid]
