#!/usr/bin/env python3
"""
main.py
=======
Launch the Pygame live map for one ambulance run.

Environment overrides::

    CORRIDOR_ORIGIN, CORRIDOR_DESTINATION, CORRIDOR_CRITICAL, CORRIDOR_TIME_SCALE
"""

import os
import logging

from config import (
    BUS_BACKLOG,
    DEFAULT_CRITICAL,
    DEFAULT_DESTINATION,
    DEFAULT_ORIGIN,
    DEFAULT_TIME_SCALE,
    DEFAULT_VEHICLE_ID,
    TARGET_FPS,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)
# Logging
from logging_setup import setup_logging
# Journey bus
from bus.journey_bus import JourneyBus
# Simulation engine
from sim.scheduler import VirtualClock
from sim.sim_bridge import SimBridge


def env_settings() -> dict:
    """Journey settings from the environment, falling back to :mod:`config`."""
    critical = os.environ.get("CORRIDOR_CRITICAL", str(DEFAULT_CRITICAL))
    return {
        "origin": os.environ.get("CORRIDOR_ORIGIN", DEFAULT_ORIGIN),
        "destination": os.environ.get("CORRIDOR_DESTINATION", DEFAULT_DESTINATION),
        "critical": critical.strip().lower() in ("1", "true", "yes", "on"),
        "time_scale": float(os.environ.get("CORRIDOR_TIME_SCALE", DEFAULT_TIME_SCALE)),
    }


def main():
    setup_logging(logging.INFO)
    log = logging.getLogger("main")
    settings = env_settings()
    log.info("Starting corridor viewer: %s", settings)

    clock = VirtualClock()
    bridge = SimBridge(
        clock,
        bus=JourneyBus(backlog=BUS_BACKLOG),
        vehicle_id=DEFAULT_VEHICLE_ID,
    )
    bridge.configure(settings["origin"], settings["destination"], settings["critical"])
    bridge.start()

    from ui import run_pygame_view

    run_pygame_view(
        bridge,
        clock,
        time_scale=settings["time_scale"],
        width=WINDOW_WIDTH,
        height=WINDOW_HEIGHT,
        fps=TARGET_FPS,
    )


if __name__ == "__main__":
    main()
