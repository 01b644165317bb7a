"""
ui/draw_road.py
===============
Renders the tile-map background of the single intersection:
  grass tiles, the two three-lane-per-direction roads, the intersection
  box, dashed lane dividers, the centre line and stop lines.

Everything is drawn with primitives once into a cached surface; the
view blits that surface every frame.
"""

from __future__ import annotations

from typing import Optional

import pygame

from sim.grid import GridGeometry


class RoadRenderer:
    """Mixin that draws the static road layout from ``self.geometry``."""

    geometry: GridGeometry
    _background: Optional[pygame.Surface] = None

    def draw_road(self, surface: pygame.Surface) -> None:
        if self._background is None:
            self._background = self._build_background()
        surface.blit(self._background, (0, 0))

    def draw_tile_grid(self, surface: pygame.Surface) -> None:
        """Thin tile outlines, used by the debug overlay."""
        g = self.geometry
        overlay = pygame.Surface((g.width, g.height), pygame.SRCALPHA)
        color = (*self.GRID_COLOR, 90)
        for col in range(g.cols + 1):
            x = col * g.tile_size
            pygame.draw.line(overlay, color, (x, 0), (x, g.height))
        for row in range(g.rows + 1):
            y = row * g.tile_size
            pygame.draw.line(overlay, color, (0, y), (g.width, y))
        surface.blit(overlay, (0, 0))

    # ------------------------------------------------------------------ #
    #  Background construction                                             #
    # ------------------------------------------------------------------ #

    def _build_background(self) -> pygame.Surface:
        g = self.geometry
        surface = pygame.Surface((g.width, g.height))
        self._draw_grass(surface)
        self._draw_road_surfaces(surface)
        self._draw_intersection_box(surface)
        self._draw_lane_markings(surface)
        self._draw_stop_lines(surface)
        return surface

    def _draw_grass(self, surface: pygame.Surface) -> None:
        g = self.geometry
        ts = g.tile_size
        surface.fill(self.GRASS_COLOR)
        for col in range(g.cols):
            for row in range(g.rows):
                if (col + row) % 2:
                    pygame.draw.rect(surface, self.GRASS_DARK_COLOR, (col * ts, row * ts, ts, ts))

    def _draw_road_surfaces(self, surface: pygame.Surface) -> None:
        g = self.geometry
        ts = g.tile_size
        c0, c1 = g.box_cols
        r0, r1 = g.box_rows
        # Vertical road
        pygame.draw.rect(surface, self.ROAD_COLOR, (c0 * ts, 0, (c1 - c0 + 1) * ts, g.height))
        # Horizontal road
        pygame.draw.rect(surface, self.ROAD_COLOR, (0, r0 * ts, g.width, (r1 - r0 + 1) * ts))

    def _box_rect(self) -> pygame.Rect:
        g = self.geometry
        ts = g.tile_size
        c0, c1 = g.box_cols
        r0, r1 = g.box_rows
        return pygame.Rect(c0 * ts, r0 * ts, (c1 - c0 + 1) * ts, (r1 - r0 + 1) * ts)

    def _draw_intersection_box(self, surface: pygame.Surface) -> None:
        pygame.draw.rect(surface, self.BOX_COLOR, self._box_rect())

    def _draw_lane_markings(self, surface: pygame.Surface) -> None:
        g = self.geometry
        ts = g.tile_size
        box = self._box_rect()
        c0, c1 = g.box_cols
        r0, r1 = g.box_rows

        # Dashed dividers between lanes of the same heading, solid centre line.
        for col in range(c0 + 1, c1 + 1):
            x = col * ts
            if col == g.mid_col:
                pygame.draw.line(surface, self.CENTER_LINE_COLOR, (x, 0), (x, box.top), 3)
                pygame.draw.line(surface, self.CENTER_LINE_COLOR, (x, box.bottom), (x, g.height), 3)
                continue
            _dashes(surface, self.LANE_DASH_COLOR, x, 0, box.top, self.DASH_LEN, self.DASH_GAP, vertical=True)
            _dashes(surface, self.LANE_DASH_COLOR, x, box.bottom, g.height, self.DASH_LEN, self.DASH_GAP, vertical=True)

        for row in range(r0 + 1, r1 + 1):
            y = row * ts
            if row == g.mid_row:
                pygame.draw.line(surface, self.CENTER_LINE_COLOR, (0, y), (box.left, y), 3)
                pygame.draw.line(surface, self.CENTER_LINE_COLOR, (box.right, y), (g.width, y), 3)
                continue
            _dashes(surface, self.LANE_DASH_COLOR, y, 0, box.left, self.DASH_LEN, self.DASH_GAP, vertical=False)
            _dashes(surface, self.LANE_DASH_COLOR, y, box.right, g.width, self.DASH_LEN, self.DASH_GAP, vertical=False)

    def _draw_stop_lines(self, surface: pygame.Surface) -> None:
        g = self.geometry
        ts = g.tile_size
        box = self._box_rect()
        mid_x = g.mid_col * ts
        mid_y = g.mid_row * ts
        w = 4
        # Northbound traffic enters from the bottom on the right half.
        pygame.draw.line(surface, self.STOP_LINE_COLOR, (mid_x, box.bottom), (box.right, box.bottom), w)
        # Southbound from the top on the left half.
        pygame.draw.line(surface, self.STOP_LINE_COLOR, (box.left, box.top), (mid_x, box.top), w)
        # Eastbound from the left on the lower half.
        pygame.draw.line(surface, self.STOP_LINE_COLOR, (box.left, mid_y), (box.left, box.bottom), w)
        # Westbound from the right on the upper half.
        pygame.draw.line(surface, self.STOP_LINE_COLOR, (box.right, box.top), (box.right, mid_y), w)


def _dashes(
    surface: pygame.Surface,
    color,
    fixed: int,
    start: int,
    stop: int,
    dash: int,
    gap: int,
    vertical: bool,
) -> None:
    pos = start
    while pos < stop:
        end = min(pos + dash, stop)
        if vertical:
            pygame.draw.line(surface, color, (fixed, pos), (fixed, end), 2)
        else:
            pygame.draw.line(surface, color, (pos, fixed), (end, fixed), 2)
        pos += dash + gap
