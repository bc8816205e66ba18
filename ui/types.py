"""
ui/types.py
===========
Lightweight data containers used across every UI module.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Tuple

ColorRGB = Tuple[int, int, int]
ColorRGBA = Tuple[int, int, int, int]


@dataclass
class GeoCamera:
    """Viewport mapping (lat, lon) degrees to screen pixels.

    Longitude is scaled by ``cos(center_lat)`` so that routes keep their
    shape at city scale.
    """
    screen_w: int
    screen_h: int
    center_lat: float = 12.9716
    center_lon: float = 77.5946
    px_per_deg: float = 4000.0

    def world_to_screen(self, lat: float, lon: float) -> Tuple[float, float]:
        k = math.cos(math.radians(self.center_lat))
        sx = self.screen_w / 2 + (lon - self.center_lon) * k * self.px_per_deg
        sy = self.screen_h / 2 - (lat - self.center_lat) * self.px_per_deg
        return sx, sy

    def screen_to_world(self, sx: float, sy: float) -> Tuple[float, float]:
        k = math.cos(math.radians(self.center_lat))
        lon = (sx - self.screen_w / 2) / (k * self.px_per_deg) + self.center_lon
        lat = -(sy - self.screen_h / 2) / self.px_per_deg + self.center_lat
        return lat, lon

    def fit(self, points: Iterable[Tuple[float, float]], margin_px: int = 80) -> None:
        """Center on *points* (lat, lon) and zoom so they fill the screen minus *margin_px*."""
        pts = list(points)
        if not pts:
            return
        lats = [p[0] for p in pts]
        lons = [p[1] for p in pts]
        self.center_lat = (min(lats) + max(lats)) / 2
        self.center_lon = (min(lons) + max(lons)) / 2
        k = math.cos(math.radians(self.center_lat))
        span_lat = max(max(lats) - min(lats), 1e-4)
        span_lon = max((max(lons) - min(lons)) * k, 1e-4)
        usable_w = max(1, self.screen_w - 2 * margin_px)
        usable_h = max(1, self.screen_h - 2 * margin_px)
        self.px_per_deg = min(usable_w / span_lon, usable_h / span_lat)
