#!/usr/bin/env python3
"""Route polyline, signals, pickup/drop markers and the ambulance (mixin)."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

import pygame

from .helpers import draw_alpha_circle, lerp_point


class RouteRenderer:
    """Mixin that draws everything anchored to map coordinates."""

    def _to_screen(self, point: Sequence[float]) -> Tuple[int, int]:
        sx, sy = self.camera.world_to_screen(point[0], point[1])
        return int(sx), int(sy)

    # ------------------------------------------------------------------ #
    #  Background                                                          #
    # ------------------------------------------------------------------ #

    def draw_grid(self, surface: pygame.Surface, spacing: int = 40) -> None:
        for x in range(0, self.width, spacing):
            pygame.draw.line(surface, self.GRID_COLOR, (x, 0), (x, self.height))
        for y in range(0, self.height, spacing):
            pygame.draw.line(surface, self.GRID_COLOR, (0, y), (self.width, y))

    # ------------------------------------------------------------------ #
    #  Route                                                               #
    # ------------------------------------------------------------------ #

    def draw_route(
        self,
        surface: pygame.Surface,
        waypoints: Sequence[Sequence[float]],
        position_index: int,
    ) -> None:
        """Travelled part dimmed, remaining part highlighted."""
        if len(waypoints) < 2:
            return
        pts = [self._to_screen(p) for p in waypoints]
        split = max(0, min(position_index, len(pts) - 1))
        if split >= 1:
            pygame.draw.lines(surface, self.ROUTE_DONE_COLOR, False, pts[: split + 1], self.ROUTE_WIDTH)
        if split < len(pts) - 1:
            pygame.draw.lines(surface, self.ROUTE_COLOR, False, pts[split:], self.ROUTE_WIDTH)

    def draw_markers(self, surface: pygame.Surface, waypoints: Sequence[Sequence[float]]) -> None:
        if not waypoints:
            return
        for point, color, label in (
            (waypoints[0], self.PICKUP_COLOR, "P"),
            (waypoints[-1], self.DROP_COLOR, "H"),
        ):
            centre = self._to_screen(point)
            pygame.draw.circle(surface, color, centre, self.MARKER_RADIUS)
            pygame.draw.circle(surface, (15, 15, 15), centre, self.MARKER_RADIUS, width=2)
            if self.font_tiny is not None:
                txt = self.font_tiny.render(label, True, (15, 15, 15))
                surface.blit(txt, txt.get_rect(center=centre))

    # ------------------------------------------------------------------ #
    #  Signals                                                             #
    # ------------------------------------------------------------------ #

    def draw_signals(self, surface: pygame.Surface, markers: Sequence[Dict[str, Any]]) -> None:
        for marker in markers:
            centre = self._to_screen(marker["location"])
            color = self.SIGNAL_GREEN if marker["cleared"] else self.SIGNAL_RED
            draw_alpha_circle(surface, (*color, 70), centre, self.SIGNAL_RADIUS + 5)
            pygame.draw.circle(surface, color, centre, self.SIGNAL_RADIUS)
            if self.font_tiny is not None:
                txt = self.font_tiny.render(str(marker["index"] + 1), True, (200, 200, 200))
                surface.blit(txt, (centre[0] + self.SIGNAL_RADIUS + 3, centre[1] - 6))

    # ------------------------------------------------------------------ #
    #  Ambulance                                                           #
    # ------------------------------------------------------------------ #

    def animate_ambulance(
        self,
        waypoints: Sequence[Sequence[float]],
        snapshot: Dict[str, Any],
        tick_fraction: float,
    ) -> Optional[Tuple[float, float]]:
        """Screen position eased between the current and the next waypoint.

        *tick_fraction* is the share of the pending step already elapsed;
        the published snapshot itself only ever holds whole waypoints.
        """
        if not waypoints or snapshot.get("position") is None:
            return None
        idx = int(snapshot.get("position_index", 0))
        here = self.camera.world_to_screen(*waypoints[idx])
        if snapshot.get("status") != "running" or idx + 1 >= len(waypoints):
            return here
        there = self.camera.world_to_screen(*waypoints[idx + 1])
        return lerp_point(here, there, tick_fraction)

    def draw_ambulance(
        self,
        surface: pygame.Surface,
        pos: Optional[Tuple[float, float]],
        critical: bool,
        tick: float,
    ) -> None:
        if pos is None:
            return
        centre = (int(pos[0]), int(pos[1]))
        if critical:
            pulse = 6 + int(4 * abs(((tick * 2) % 2) - 1))
            draw_alpha_circle(surface, (*self.CRITICAL_COLOR, 90), centre, self.AMBULANCE_RADIUS + pulse)
        pygame.draw.circle(surface, self.AMBULANCE_COLOR, centre, self.AMBULANCE_RADIUS)
        # red cross
        arm = self.AMBULANCE_RADIUS - 3
        pygame.draw.line(surface, self.CRITICAL_COLOR, (centre[0] - arm, centre[1]), (centre[0] + arm, centre[1]), 3)
        pygame.draw.line(surface, self.CRITICAL_COLOR, (centre[0], centre[1] - arm), (centre[0], centre[1] + arm), 3)

    @staticmethod
    def _waypoint_list(route: Any) -> List[Tuple[float, float]]:
        if route is None:
            return []
        return [(c.lat, c.lon) for c in route]
