"""
ui/helpers.py
=============
Pure utility functions shared across UI modules:
interpolation, alpha-surface drawing and text rendering.
"""

from __future__ import annotations

from typing import Optional, Tuple

import pygame


# ── Interpolation helpers ─────────────────────────────────────────────────────

def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def lerp_point(
    a: Tuple[float, float], b: Tuple[float, float], t: float
) -> Tuple[float, float]:
    """Linear interpolation between two screen points, *t* clamped to [0, 1]."""
    t = max(0.0, min(1.0, t))
    return lerp(a[0], b[0], t), lerp(a[1], b[1], t)


# ── Alpha drawing helpers ────────────────────────────────────────────────────

def draw_alpha_circle(
    target: pygame.Surface,
    color: Tuple[int, ...],
    centre: Tuple[int, int],
    radius: int,
) -> None:
    """Draw a semi-transparent circle."""
    if radius < 1:
        return
    size = radius * 2
    tmp = pygame.Surface((size, size), pygame.SRCALPHA)
    pygame.draw.circle(tmp, color, (radius, radius), radius)
    target.blit(tmp, (centre[0] - radius, centre[1] - radius))


# ── Text helpers ─────────────────────────────────────────────────────────────

def load_font(size: int, bold: bool = False) -> pygame.font.Font:
    """Monospace system font with a default-font fallback."""
    try:
        return pygame.font.SysFont("consolas,menlo,dejavusansmono,monospace", size, bold=bold)
    except (pygame.error, OSError):
        return pygame.font.Font(None, size + 4)


def render_text(
    surface: pygame.Surface,
    font: Optional[pygame.font.Font],
    text: str,
    pos: Tuple[int, int],
    color: Tuple[int, ...] = (230, 230, 235),
    anchor: str = "topleft",
) -> Optional[pygame.Rect]:
    """Render text with flexible *anchor* ('topleft', 'center', 'midright' …)."""
    if font is None:
        return None
    img = font.render(text, True, color)
    rect = img.get_rect(**{anchor: pos})
    surface.blit(img, rect)
    return rect
