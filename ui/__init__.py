#!/usr/bin/env python3

from .types import ColorRGB, ColorRGBA, GeoCamera
from .constants import ViewConstants
from .draw_route import RouteRenderer
from .hud import HudRenderer
from .pygame_view import PygameCorridorView, run_pygame_view

__all__ = [
    "ColorRGB",
    "ColorRGBA",
    "GeoCamera",
    "ViewConstants",
    "RouteRenderer",
    "HudRenderer",
    "PygameCorridorView",
    "run_pygame_view",
]
