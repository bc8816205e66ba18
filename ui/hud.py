#!/usr/bin/env python3
"""HUD panel, legend, splash screen, and pause banner (mixin)."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

import pygame

from .helpers import render_text


class HudRenderer:
    """Mixin that draws every overlay / HUD element."""

    # ------------------------------------------------------------------ #
    #  Main HUD panel                                                      #
    # ------------------------------------------------------------------ #

    def draw_hud(
        self,
        surface: pygame.Surface,
        snapshot: Mapping[str, Any],
        route: Mapping[str, Any],
        signals: Sequence[Mapping[str, Any]],
        eta_minutes: Optional[float],
        tick: float,
    ) -> None:
        if self.font_small is None or self.font_tiny is None:
            return

        panel_width = 290
        panel_height = 214
        panel_rect = pygame.Rect(16, self.height - panel_height - 16, panel_width, panel_height)
        pygame.draw.rect(surface, self.HUD_BG_COLOR, panel_rect, border_radius=6)
        pygame.draw.rect(surface, self.HUD_BORDER_COLOR, panel_rect, width=1, border_radius=6)

        x = panel_rect.x + 10
        y = panel_rect.y + 8
        origin = route.get("origin", {}).get("name") or "?"
        dest = route.get("destination", {}).get("name") or "?"
        surface.blit(
            self.font_small.render(f"{origin.upper()} > {dest.upper()}"[:34], True, (240, 240, 240)),
            (x, y),
        )
        y += 20

        status = str(snapshot.get("status", "idle")).upper()
        critical = bool(route.get("critical"))
        status_color = self.CRITICAL_COLOR if critical else (180, 180, 180)
        surface.blit(
            self.font_tiny.render(
                f"STATUS {status}{'   CRITICAL' if critical else ''}", True, status_color
            ),
            (x, y),
        )
        y += 18

        # Progress bar
        progress = float(snapshot.get("progress_percent", 0.0))
        bar_w, bar_h = panel_width - 20, 8
        pygame.draw.rect(surface, (40, 40, 40), (x, y, bar_w, bar_h), border_radius=3)
        done_px = max(0, min(bar_w, int(bar_w * progress / 100.0)))
        if done_px > 0:
            pygame.draw.rect(surface, self.ROUTE_COLOR, (x, y, done_px, bar_h), border_radius=3)
        y += 12
        surface.blit(self.font_tiny.render(f"PROGRESS {progress:5.1f}%", True, (200, 200, 200)), (x, y))
        y += 18

        speed = float(snapshot.get("speed_kmh", 0.0))
        density = snapshot.get("density") or "-"
        density_color = self.DENSITY_COLORS.get(density, (160, 160, 160))
        surface.blit(self.font_tiny.render(f"SPEED {speed:>4.0f} KM/H", True, (240, 240, 240)), (x, y))
        surface.blit(self.font_tiny.render(f"TRAFFIC {density.upper()}", True, density_color), (x + 140, y))
        y += 18

        distance = route.get("distance_km", 0.0)
        eta_text = "--" if eta_minutes is None else f"{eta_minutes:.0f} MIN"
        surface.blit(
            self.font_tiny.render(f"DIST {distance:.2f} KM   ETA {eta_text}", True, (200, 200, 200)),
            (x, y),
        )
        y += 22

        # Signal strip
        cleared = sum(1 for s in signals if s.get("cleared"))
        blink_on = int((tick * 1000) // self.HUD_BLINK_MS) % 2 == 0
        for i, sig in enumerate(signals):
            color = self.SIGNAL_GREEN if sig.get("cleared") else self.SIGNAL_RED
            if not sig.get("cleared") and status == "RUNNING" and not blink_on:
                color = (90, 30, 30)
            pygame.draw.circle(surface, color, (x + 8 + i * 22, y + 8), 7)
        surface.blit(
            self.font_tiny.render(f"SIGNALS {cleared}/{len(signals)} CLEARED", True, (160, 160, 160)),
            (x + 8 + len(signals) * 22, y + 2),
        )
        y += 22

        upcoming = next((s for s in signals if not s.get("cleared")), None)
        next_text = upcoming.get("name", "?") if upcoming else "ALL CLEAR"
        render_text(surface, self.font_tiny, f"NEXT {next_text.upper()}"[:40], (x, y), (200, 200, 200))
        y += 16
        low, high = route.get("signal_delay_min") or (0, 0)
        render_text(
            surface, self.font_tiny, f"SIGNAL DELAY {low:.0f}-{high:.0f} MIN",
            (x, y), (160, 160, 160),
        )

    # ------------------------------------------------------------------ #
    #  Splash screen                                                       #
    # ------------------------------------------------------------------ #

    def _draw_splash(self, surface: pygame.Surface, tick: float) -> None:
        if self.font_title is None or self.font_small is None:
            return
        render_text(
            surface, self.font_title, "AMBULANCE CORRIDOR SIM",
            (self.width // 2, self.height // 2 - 30), (240, 240, 240), anchor="center",
        )
        if int(tick * 2) % 2 == 0:
            render_text(
                surface, self.font_small, "Press any key to start",
                (self.width // 2, self.height // 2 + 20), (160, 160, 160), anchor="center",
            )
        lines = [
            "SPACE  Pause/Resume",
            "S      Start / restart run",
            "X      Stop run",
            "C      Toggle critical",
            "L      Toggle legend",
            "F12    Screenshot",
        ]
        y = self.height // 2 + 60
        for line in lines:
            t = self.font_tiny.render(line, True, (100, 100, 100)) if self.font_tiny else None
            if t:
                surface.blit(t, t.get_rect(center=(self.width // 2, y)))
                y += 16

    # ------------------------------------------------------------------ #
    #  Legend                                                               #
    # ------------------------------------------------------------------ #

    def _draw_legend(self, surface: pygame.Surface) -> None:
        if self.font_tiny is None:
            return
        x = self.width - 140
        y = self.height - 16 - len(self.LEGEND_ITEMS) * 18 - 8
        box_w, box_h = 132, len(self.LEGEND_ITEMS) * 18 + 10
        pygame.draw.rect(
            surface, self.HUD_BG_COLOR, (x - 6, y - 4, box_w, box_h), border_radius=4
        )
        pygame.draw.rect(
            surface, self.HUD_BORDER_COLOR, (x - 6, y - 4, box_w, box_h), width=1, border_radius=4
        )
        for label, color in self.LEGEND_ITEMS:
            pygame.draw.circle(surface, color, (x + 4, y + 6), 4)
            text = self.font_tiny.render(label, True, (200, 200, 200))
            surface.blit(text, (x + 14, y))
            y += 18

    # ------------------------------------------------------------------ #
    #  Pause banner                                                        #
    # ------------------------------------------------------------------ #

    def _draw_pause_banner(self, surface: pygame.Surface) -> None:
        overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 100))
        surface.blit(overlay, (0, 0))
        render_text(
            surface, self.font_title, "PAUSED",
            (self.width // 2, self.height // 2), (220, 220, 220), anchor="center",
        )
