"""
ui/helpers.py
=============
Pure utility methods shared across UI modules:
font loading, alpha-surface drawing, facing → sprite angle mapping and
unit conversion.
"""

from __future__ import annotations

from typing import Dict, Tuple

import pygame

from sim.stats import PIXELS_PER_METER

from .types import ColorRGB, ColorRGBA

# ── Facing / sprite angle ─────────────────────────────────────────────────────

# Sprites are drawn pointing right; pygame rotates counter-clockwise.
_FACING_TO_ANGLE: Dict[str, float] = {
    "RIGHT": 0.0,
    "UP":    90.0,
    "LEFT":  180.0,
    "DOWN":  270.0,
}


class ViewHelpers:
    """Mixin of small stateless helpers."""

    @staticmethod
    def _load_font(size: int, bold: bool = False) -> pygame.font.Font:
        return pygame.font.SysFont("consolas,dejavusansmono,monospace", size, bold=bold)

    @staticmethod
    def facing_to_angle(facing: str) -> float:
        """Rotation in degrees for a sprite drawn pointing right."""
        return _FACING_TO_ANGLE.get(facing.upper(), 0.0)

    @staticmethod
    def px_to_m(value: float) -> float:
        return value / PIXELS_PER_METER

    def _vehicle_color(self, appearance_tag: int) -> ColorRGB:
        palette = self.DEFAULT_VEHICLE_COLORS
        return palette[appearance_tag % len(palette)]

    # ── Alpha drawing helpers ────────────────────────────────────────────

    @staticmethod
    def draw_alpha_rect(
        target: pygame.Surface,
        color: ColorRGBA,
        rect: pygame.Rect,
        border_radius: int = 0,
    ) -> None:
        """Draw a semi-transparent rectangle (colour tuple with 4 channels)."""
        tmp = pygame.Surface((rect.w, rect.h), pygame.SRCALPHA)
        pygame.draw.rect(tmp, color, (0, 0, rect.w, rect.h), border_radius=border_radius)
        target.blit(tmp, rect.topleft)

    # ── Text helper ──────────────────────────────────────────────────────

    @staticmethod
    def render_text(
        surface: pygame.Surface,
        font: pygame.font.Font,
        text: str,
        pos: Tuple[int, int],
        color: Tuple[int, ...] = (230, 230, 235),
        anchor: str = "topleft",
    ) -> pygame.Rect:
        """Render text with flexible *anchor* ('topleft', 'center', 'midright' …)."""
        img = font.render(text, True, color)
        rect = img.get_rect(**{anchor: pos})
        surface.blit(img, rect)
        return rect
