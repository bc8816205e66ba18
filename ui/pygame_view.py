#!/usr/bin/env python3
"""
Main view class: combines all UI mixins into one runnable Pygame window.

Module layout
─────────────
    ui/
    ├── types.py           - ColorRGB, ColorRGBA, GeoCamera
    ├── constants.py       - ViewConstants mixin (all class-level constants)
    ├── helpers.py         - interpolation, alpha and text utilities
    ├── draw_route.py      - RouteRenderer mixin (route, signals, markers, ambulance)
    ├── hud.py             - HudRenderer mixin  (HUD, legend, splash, pause)
    └── pygame_view.py     - PygameCorridorView (this file - main loop)

Simulated time is owned by a :class:`~sim.scheduler.VirtualClock` that
this loop advances by ``frame_dt * time_scale``; the simulator itself
never runs on its own thread.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Any, Dict, Optional

import pygame

from bus.journey_bus import TOPIC_POSITION
from bus.message import BusMessage
from sim.scheduler import VirtualClock
from sim.sim_bridge import SimBridge

from .constants import ViewConstants
from .draw_route import RouteRenderer
from .helpers import load_font
from .hud import HudRenderer
from .types import GeoCamera

log = logging.getLogger("ui")


class PygameCorridorView(
    ViewConstants,
    RouteRenderer,
    HudRenderer,
):
    """Live map of one ambulance run powered by Pygame.

    Inherits drawing logic from focused mixin modules so each file
    stays small and single-purpose.
    """

    def __init__(
        self,
        bridge: SimBridge,
        clock: VirtualClock,
        time_scale: float = 8.0,
        width: int = 1000,
        height: int = 700,
        fps: int = 60,
    ):
        self.bridge = bridge
        self.sim_clock = clock
        self.time_scale = time_scale
        self.width = width
        self.height = height
        self.fps = fps

        self.screen: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None
        self.font_small: Optional[pygame.font.Font] = None
        self.font_tiny: Optional[pygame.font.Font] = None
        self.font_title: Optional[pygame.font.Font] = None

        self.camera = GeoCamera(width, height)
        self.time_seconds = 0.0

        # UI state
        self.paused = False
        self.show_legend = True
        self.show_splash = True
        self._screenshot_flash_until = 0.0
        self._last_step_at = clock.time()

        self._unsubscribe = bridge.bus.subscribe(TOPIC_POSITION, self._on_position)
        self._fit_camera()

    # ------------------------------------------------------------------ #
    #  Bus                                                                 #
    # ------------------------------------------------------------------ #
    def _on_position(self, msg: BusMessage) -> None:
        self._last_step_at = self.sim_clock.time()

    def _tick_fraction(self, snapshot: Dict[str, Any]) -> float:
        step_s = float(snapshot.get("step_ms") or 0.0) / 1000.0
        if step_s <= 0:
            return 0.0
        return (self.sim_clock.time() - self._last_step_at) / step_s

    # ------------------------------------------------------------------ #
    #  Camera / resize                                                     #
    # ------------------------------------------------------------------ #
    def _fit_camera(self) -> None:
        self.camera.screen_w, self.camera.screen_h = self.width, self.height
        self.camera.fit(self._waypoint_list(self.bridge.route), self.MAP_MARGIN_PX)

    def _handle_resize(self, new_w: int, new_h: int) -> None:
        self.width = max(400, new_w)
        self.height = max(300, new_h)
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )
        self._fit_camera()

    # ------------------------------------------------------------------ #
    #  Screenshot                                                          #
    # ------------------------------------------------------------------ #
    def _take_screenshot(self) -> None:
        if self.screen is None:
            return
        os.makedirs(self.SCREENSHOT_DIR, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = os.path.join(self.SCREENSHOT_DIR, f"corridor_{stamp}.png")
        pygame.image.save(self.screen, path)
        self._screenshot_flash_until = self.time_seconds + 0.35
        log.info("screenshot saved to %s", path)

    # ------------------------------------------------------------------ #
    #  Controls                                                            #
    # ------------------------------------------------------------------ #
    def _toggle_critical(self) -> None:
        summary = self.bridge.route_summary()
        self.bridge.configure(
            summary["origin"]["name"],
            summary["destination"]["name"],
            not self.bridge.critical,
        )
        self._fit_camera()

    # ------------------------------------------------------------------ #
    #  Main loop                                                           #
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        pygame.init()
        pygame.display.set_caption("AMBULANCE CORRIDOR SIM")
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )
        self.clock = pygame.time.Clock()
        self.font_small = load_font(13)
        self.font_tiny = load_font(11)
        self.font_title = load_font(28, bold=True)

        running = True
        try:
            while running:
                delta_time = self.clock.tick(self.fps) / 1000.0
                self.time_seconds += delta_time

                # ---- events --------------------------------------------- #
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.VIDEORESIZE:
                        self._handle_resize(event.w, event.h)
                    elif event.type == pygame.KEYDOWN:
                        if self.show_splash:
                            self.show_splash = False
                            continue
                        if event.key == pygame.K_SPACE:
                            self.paused = not self.paused
                        elif event.key == pygame.K_s:
                            self.bridge.start()
                            self.paused = False
                        elif event.key == pygame.K_x:
                            self.bridge.stop()
                        elif event.key == pygame.K_c:
                            self._toggle_critical()
                        elif event.key == pygame.K_l:
                            self.show_legend = not self.show_legend
                        elif event.key == pygame.K_F12:
                            self._take_screenshot()

                # ---- splash --------------------------------------------- #
                if self.show_splash:
                    self.screen.fill(self.BG_COLOR)
                    self._draw_splash(self.screen, self.time_seconds)
                    pygame.display.flip()
                    continue

                # ---- simulation time ------------------------------------ #
                if not self.paused:
                    self.sim_clock.advance(delta_time * self.time_scale)

                snapshot = self.bridge.snapshot().to_dict()
                route = self.bridge.route_summary()
                signals = self.bridge.signal_markers()
                waypoints = self._waypoint_list(self.bridge.route)

                # ---- render --------------------------------------------- #
                self.screen.fill(self.BG_COLOR)
                self.draw_grid(self.screen)
                self.draw_route(self.screen, waypoints, int(snapshot["position_index"]))
                self.draw_signals(self.screen, signals)
                self.draw_markers(self.screen, waypoints)
                pos = self.animate_ambulance(waypoints, snapshot, self._tick_fraction(snapshot))
                self.draw_ambulance(self.screen, pos, bool(snapshot["critical"]), self.time_seconds)

                self.draw_hud(
                    self.screen, snapshot, route, signals,
                    self.bridge.eta_minutes(), self.time_seconds,
                )
                if self.show_legend:
                    self._draw_legend(self.screen)
                if self.paused:
                    self._draw_pause_banner(self.screen)
                if self.time_seconds < self._screenshot_flash_until:
                    flash = pygame.Surface(
                        (self.width, self.height), pygame.SRCALPHA
                    )
                    flash.fill((255, 255, 255, 40))
                    self.screen.blit(flash, (0, 0))

                pygame.display.flip()
        finally:
            self._unsubscribe()
            self.bridge.dispose()
            pygame.quit()


# ---------------------------------------------------------------------- #
#  Convenience entry point                                                 #
# ---------------------------------------------------------------------- #
def run_pygame_view(
    bridge: SimBridge,
    clock: VirtualClock,
    time_scale: float = 8.0,
    width: int = 1000,
    height: int = 700,
    fps: int = 60,
) -> None:
    view = PygameCorridorView(
        bridge=bridge, clock=clock, time_scale=time_scale,
        width=width, height=height, fps=fps,
    )
    view.run()


if __name__ == "__main__":
    raise SystemExit(
        "pygame_view.py needs a bridge and a clock. Run `python main.py` "
        "or call run_pygame_view(bridge, clock)."
    )
