#!/usr/bin/env python3
"""HUD side panel, legend, debug overlay, splash screen, and pause banner (mixin)."""

from __future__ import annotations

from typing import List, Sequence

import pygame

from sim.routes import Direction

from .types import HudLine, VehicleRenderState


class HudRenderer:
    """Mixin that draws every overlay / HUD element."""

    # ------------------------------------------------------------------ #
    #  Statistics side panel                                               #
    # ------------------------------------------------------------------ #

    def _hud_lines(self) -> List[HudLine]:
        world = self.world
        stats = world.stats
        lines = [
            HudLine("TIME", f"{world.elapsed_s:6.1f} s"),
            HudLine("VELOCITY", world.velocity_level.value),
            HudLine(
                "AUTO SPAWN",
                "ON" if world.auto_spawn else "OFF",
                self.GO_COLOR if world.auto_spawn else self.HUD_DIM_COLOR,
            ),
            HudLine("ACTIVE", str(len(world.vehicles))),
            HudLine("SPAWNED", str(stats.total_spawned)),
            HudLine("EXITED", str(stats.total_exited)),
            HudLine("REJECTED", str(stats.rejected_spawns)),
            HudLine(
                "CLOSE CALLS",
                str(stats.close_calls + sum(v.close_calls for v in world.vehicles)),
                self.WARNING_COLOR,
            ),
        ]
        for direction in Direction:
            lines.append(HudLine(f"  {direction.value}", str(stats.by_direction.get(direction, 0))))
        if stats.intersection_times:
            avg = sum(stats.intersection_times) / len(stats.intersection_times)
            lines.append(HudLine("AVG CROSSING", f"{avg:.2f} s"))
        return lines

    def draw_hud(self, surface: pygame.Surface, states: Sequence[VehicleRenderState], tick: float) -> None:
        if self.font_small is None or self.font_tiny is None:
            return

        panel_rect = pygame.Rect(self.geometry.width, 0, self.hud_width, self.height)
        pygame.draw.rect(surface, self.HUD_BG_COLOR, panel_rect)
        pygame.draw.line(
            surface, self.HUD_BORDER_COLOR,
            panel_rect.topleft, panel_rect.bottomleft, 1,
        )

        x = panel_rect.x + 14
        y = 14
        self.render_text(surface, self.font_small, "SMART ROAD", (x, y), self.HUD_TEXT_COLOR)
        y += 26

        for line in self._hud_lines():
            self.render_text(surface, self.font_tiny, line.label, (x, y), self.HUD_DIM_COLOR)
            self.render_text(
                surface, self.font_tiny, line.value,
                (panel_rect.right - 14, y), line.color, anchor="topright",
            )
            y += 16

        # Emergency stops blink in the panel
        y += 10
        blink_on = int((tick * 1000) // self.HUD_BLINK_MS) % 2 == 0
        stopped = [s for s in states if s.regulation == "EMERGENCY"]
        if stopped and blink_on:
            self.render_text(
                surface, self.font_tiny,
                f"EMERGENCY STOP x{len(stopped)}", (x, y), self.WARNING_COLOR,
            )
        y += 24

        self._draw_legend(surface, x, y)
        y += len(self.LEGEND_ITEMS) * 18 + 16

        for line in self.CONTROLS:
            self.render_text(surface, self.font_tiny, line, (x, y), self.HUD_DIM_COLOR)
            y += 15

    # ------------------------------------------------------------------ #
    #  Splash screen                                                       #
    # ------------------------------------------------------------------ #

    def _draw_splash(self, surface: pygame.Surface, tick: float) -> None:
        if self.font_title is None or self.font_small is None:
            return
        title = self.font_title.render("SMART ROAD", True, (240, 240, 240))
        surface.blit(
            title,
            title.get_rect(center=(self.width // 2, self.height // 2 - 30)),
        )
        if int(tick * 2) % 2 == 0:
            prompt = self.font_small.render("Press any key to start", True, (160, 160, 160))
            surface.blit(
                prompt,
                prompt.get_rect(center=(self.width // 2, self.height // 2 + 20)),
            )
        y = self.height // 2 + 60
        for line in self.CONTROLS:
            t = self.font_tiny.render(line, True, (100, 100, 100)) if self.font_tiny else None
            if t:
                surface.blit(t, t.get_rect(center=(self.width // 2, y)))
                y += 16

    # ------------------------------------------------------------------ #
    #  Legend                                                               #
    # ------------------------------------------------------------------ #

    def _draw_legend(self, surface: pygame.Surface, x: int, y: int) -> None:
        if self.font_tiny is None:
            return
        for label, color in self.LEGEND_ITEMS:
            pygame.draw.circle(surface, color, (x + 4, y + 6), 4)
            text = self.font_tiny.render(label, True, (200, 200, 200))
            surface.blit(text, (x + 14, y))
            y += 18

    # ------------------------------------------------------------------ #
    #  Debug / FPS overlay                                                 #
    # ------------------------------------------------------------------ #

    def _draw_debug_overlay(
        self, surface: pygame.Surface, states: Sequence[VehicleRenderState], dt: float
    ) -> None:
        if self.font_tiny is None:
            return
        fps = self.clock.get_fps() if self.clock else 0.0
        caution = sum(1 for s in states if s.regulation == "CAUTION")
        lines = [
            f"FPS  {fps:.1f}",
            f"DT   {dt * 1000:.1f} ms",
            f"VEH  {len(states)}",
            f"CAUT {caution}",
            f"TIME {self.time_seconds:.1f}s",
        ]
        x, y = 16, 16
        for line in lines:
            text = self.font_tiny.render(line, True, (0, 255, 127))
            surface.blit(text, (x, y))
            y += 14
        for state in states:
            label = self.font_tiny.render(
                f"{state.vehicle_id}:{self.px_to_m(state.speed):.0f}", True, (240, 240, 240)
            )
            surface.blit(label, (int(state.x) + 10, int(state.y) - 18))

    # ------------------------------------------------------------------ #
    #  Pause banner                                                        #
    # ------------------------------------------------------------------ #

    def _draw_pause_banner(self, surface: pygame.Surface) -> None:
        overlay = pygame.Surface((self.geometry.width, self.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 100))
        surface.blit(overlay, (0, 0))
        if self.font_title:
            text = self.font_title.render("PAUSED", True, (220, 220, 220))
            surface.blit(text, text.get_rect(center=(self.geometry.width // 2, self.height // 2)))
