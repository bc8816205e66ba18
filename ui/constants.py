#!/usr/bin/env python3
"""Visual constants shared across all renderers."""

from __future__ import annotations

from typing import Dict, Sequence, Tuple

from .types import ColorRGB


class ViewConstants:
    """Mixin providing every visual / layout constant."""

    BG_COLOR: ColorRGB = (15, 15, 15)
    GRID_COLOR: ColorRGB = (26, 26, 26)
    HUD_BG_COLOR: ColorRGB = (22, 22, 22)
    HUD_BORDER_COLOR: ColorRGB = (42, 42, 42)
    WARNING_COLOR: ColorRGB = (255, 60, 60)

    ROUTE_COLOR: ColorRGB = (86, 168, 255)
    ROUTE_DONE_COLOR: ColorRGB = (60, 90, 130)
    PICKUP_COLOR: ColorRGB = (100, 226, 170)
    DROP_COLOR: ColorRGB = (255, 88, 88)
    AMBULANCE_COLOR: ColorRGB = (240, 240, 240)
    CRITICAL_COLOR: ColorRGB = (255, 60, 60)

    SIGNAL_GREEN: ColorRGB = (0, 255, 127)
    SIGNAL_RED: ColorRGB = (255, 60, 60)

    DENSITY_COLORS: Dict[str, ColorRGB] = {
        "light": (0, 255, 127),
        "moderate": (246, 191, 90),
        "heavy": (255, 88, 88),
    }

    ROUTE_WIDTH = 4
    SIGNAL_RADIUS = 7
    MARKER_RADIUS = 9
    AMBULANCE_RADIUS = 8
    HUD_BLINK_MS = 500
    MAP_MARGIN_PX = 90

    LEGEND_ITEMS: Sequence[Tuple[str, ColorRGB]] = (
        ("PICKUP", (100, 226, 170)),
        ("DROP", (255, 88, 88)),
        ("SIGNAL GREEN", (0, 255, 127)),
        ("SIGNAL RED", (255, 60, 60)),
    )

    SCREENSHOT_DIR = "screenshots"
