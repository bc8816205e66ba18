#!/usr/bin/env python3
"""
Quick demo: replays one ambulance run headless and prints every
position update, so the engine can be inspected without Pygame.

Usage:
    python demo.py
    CORRIDOR_CRITICAL=1 python demo.py
"""

import logging
import time

from bus.journey_bus import JourneyBus, TOPIC_POSITION, TOPIC_STATUS
from logging_setup import setup_logging
from main import env_settings
from sim.scheduler import VirtualClock
from sim.sim_bridge import SimBridge


def print_position(msg):
    p = msg.payload
    lat, lon = p["position"]
    print(
        f"#{p['position_index']:>2}  {p['progress_percent']:6.2f}%  "
        f"{p['speed_kmh']:>4.0f} km/h  {str(p['density']):<8}  "
        f"({lat:.5f}, {lon:.5f})  next {p['step_ms']:.0f} ms"
    )


def print_status(msg):
    print(f"-- status: {msg.payload['status']}")


def main() -> None:
    setup_logging(logging.WARNING)
    settings = env_settings()

    clock = VirtualClock()
    bus = JourneyBus()
    bus.subscribe(TOPIC_POSITION, print_position)
    bus.subscribe(TOPIC_STATUS, print_status)

    bridge = SimBridge(clock, bus=bus)
    summary = bridge.configure(settings["origin"], settings["destination"], settings["critical"])
    print(
        f"{summary['origin']['name']} -> {summary['destination']['name']}: "
        f"{summary['distance_km']:.2f} km, {summary['waypoint_count']} waypoints, "
        f"critical={summary['critical']}"
    )

    bridge.start()
    started = time.perf_counter()
    clock.run_until_idle()
    print(
        f"simulated {clock.time():.1f} s in {time.perf_counter() - started:.3f} s; "
        f"bus {bus.metrics.report()}"
    )
    bridge.dispose()


if __name__ == "__main__":
    main()
