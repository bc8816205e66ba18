"""
sim/sim_bridge.py
=================
Orchestrator tying the location resolver, route generator,
:class:`~sim.motion.MotionSimulator` and the
:class:`bus.journey_bus.JourneyBus` together.  Consumers (viewer, HTTP
API, dashboards) read the latest snapshot without touching simulator
internals.

Public API
----------
* ``configure(origin, destination, critical)`` → ``dict``
* ``start()``                 → ``bool``
* ``stop()``                  → ``None``
* ``snapshot()``              → :class:`~sim.motion.SimulationSnapshot`
* ``signal_states()``         → ``List[SignalState]``
* ``signal_markers()``        → ``List[dict]``
* ``route_summary()``         → ``dict``
* ``journey()``               → :class:`JourneyRecord` or ``None``
* ``eta_minutes(now)``        → ``float`` or ``None``
* ``is_finished()``           → ``bool``
* ``dispose()``               → ``None``
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

from bus.journey_bus import JourneyBus, TOPIC_JOURNEY, TOPIC_POSITION, TOPIC_STATUS
from sim.eta import estimated_arrival, remaining_minutes, signal_delay_range
from sim.gazetteer import (
    CITY_CENTER,
    GAZETTEER,
    SIGNAL_NAMES,
    GazetteerEntry,
    SignalNamesEntry,
    resolve,
    signal_names_for,
)
from sim.geo import Coordinate, distance_km
from sim.motion import MotionSimulator, SimulationSnapshot, SimulationStatus
from sim.route import Route, generate_route
from sim.scheduler import Scheduler
from sim.signals import SignalState, signal_markers, signal_states
from sim.traffic_policy import DEFAULT_POLICY, CorridorPolicy

log = logging.getLogger("sim_bridge")

# Status labels published on the ``simulation-status`` topic.
_STATUS_LABELS: Dict[SimulationStatus, str] = {
    SimulationStatus.IDLE: "idle",
    SimulationStatus.RUNNING: "active",
    SimulationStatus.COMPLETED: "completed",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class JourneyRecord:
    """One dispatched run, as announced to observers."""

    vehicle_id: str
    pickup: str
    drop: str
    critical: bool
    start_time: datetime
    estimated_arrival: datetime

    def to_payload(self) -> Dict[str, Any]:
        return {
            "vehicle_id": self.vehicle_id,
            "pickup_location": self.pickup,
            "drop_location": self.drop,
            "is_critical": self.critical,
            "start_time": self.start_time.isoformat(),
            "estimated_arrival": self.estimated_arrival.isoformat(),
            "is_simulating": True,
        }


class SimBridge:
    """Per-vehicle simulation façade publishing onto a :class:`JourneyBus`.

    Parameters
    ----------
    scheduler : Scheduler
        Timer source for the simulator (``VirtualClock`` or an asyncio loop).
    bus : JourneyBus or None
        Destination for journey, position and status messages.
    policy : CorridorPolicy or None
        Tunable constants.
    vehicle_id : str
        Sender ID on the bus.
    gazetteer : sequence of (key, Coordinate)
        Place-name table used to resolve origin and destination.
    signal_table : sequence of (key, names)
        Named signals per pickup area, matched like *gazetteer*.
    now : callable or None
        Wall-clock source for journey start times and the ETA.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        bus: Optional[JourneyBus] = None,
        policy: Optional[CorridorPolicy] = None,
        vehicle_id: str = "AMB_01",
        gazetteer: Sequence[GazetteerEntry] = GAZETTEER,
        signal_table: Sequence[SignalNamesEntry] = SIGNAL_NAMES,
        now: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._policy = policy or DEFAULT_POLICY
        self._bus = bus or JourneyBus()
        self._vehicle_id = vehicle_id
        self._gazetteer = gazetteer
        self._signal_table = signal_table
        self._now = now or _utcnow

        self._sim = MotionSimulator(scheduler, policy=self._policy)
        self._sim.add_listener(self._on_snapshot)

        self._origin_name = ""
        self._destination_name = ""
        self._origin: Coordinate = CITY_CENTER
        self._destination: Coordinate = CITY_CENTER
        self._signal_names = signal_names_for("", signal_table)
        self._journey: Optional[JourneyRecord] = None
        self._last_status = SimulationStatus.IDLE

    # ── Inputs ────────────────────────────────────────────────────────────────

    @property
    def bus(self) -> JourneyBus:
        return self._bus

    @property
    def route(self) -> Optional[Route]:
        return self._sim.route

    @property
    def critical(self) -> bool:
        return self._sim.critical

    def configure(self, origin: str, destination: str, critical: bool = False) -> Dict[str, Any]:
        """Resolve both names, regenerate the route and reset to idle."""
        self._origin_name = origin or ""
        self._destination_name = destination or ""
        self._origin = resolve(origin, self._gazetteer)
        self._destination = resolve(destination, self._gazetteer)
        self._signal_names = signal_names_for(origin, self._signal_table)
        self._journey = None

        self._sim.set_critical(critical)
        self._sim.set_route(generate_route(self._origin, self._destination, self._policy))
        log.info(
            "configured %r -> %r critical=%s (%.2f km)",
            self._origin_name, self._destination_name, critical,
            distance_km(self._origin, self._destination, self._policy),
        )
        return self.route_summary()

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def start(self) -> bool:
        """(Re)run the simulation from the first waypoint, then announce the journey."""
        if self._sim.disposed:
            log.warning("start() ignored: bridge disposed")
            return False
        if self._sim.route is None:
            log.warning("start() before configure(); nothing to simulate")
            return False
        start_time = self._now()
        journey = JourneyRecord(
            vehicle_id=self._vehicle_id,
            pickup=self._origin_name,
            drop=self._destination_name,
            critical=self._sim.critical,
            start_time=start_time,
            estimated_arrival=estimated_arrival(start_time, self._policy),
        )
        self._journey = journey
        if not self._sim.start():
            self._journey = None
            return False
        self._bus.publish(TOPIC_JOURNEY, self._vehicle_id, journey.to_payload())
        return True

    def stop(self) -> None:
        self._sim.stop()
        self._journey = None

    def dispose(self) -> None:
        """Cancel the pending tick for good; call when the consumer goes away."""
        self._sim.dispose()
        self._journey = None
        log.info("SimBridge disposed")

    # ── Read side ─────────────────────────────────────────────────────────────

    def snapshot(self) -> SimulationSnapshot:
        return self._sim.snapshot()

    def signal_states(self) -> List[SignalState]:
        return signal_states(self.snapshot().progress_fraction, self._policy, self._signal_names)

    def signal_markers(self) -> List[Dict[str, Any]]:
        """Signal states with their coordinates on the current route."""
        route = self._sim.route
        if route is None:
            return []
        return signal_markers(
            route, self.snapshot().progress_fraction, self._policy, self._signal_names
        )

    def route_summary(self) -> Dict[str, Any]:
        route = self._sim.route
        low, high = signal_delay_range(len(self._signal_names), self._policy)
        return {
            "origin": {"name": self._origin_name, "location": self._origin.as_list()},
            "destination": {
                "name": self._destination_name,
                "location": self._destination.as_list(),
            },
            "distance_km": round(distance_km(self._origin, self._destination, self._policy), 3),
            "waypoint_count": len(route) if route else 0,
            "critical": self._sim.critical,
            "signal_names": list(self._signal_names),
            "signal_delay_min": [low, high],
        }

    def journey(self) -> Optional[JourneyRecord]:
        return self._journey

    def eta_minutes(self, now: Optional[datetime] = None) -> Optional[float]:
        """Nominal remaining minutes for the current journey, if one is running."""
        if self._journey is None:
            return None
        return remaining_minutes(self._journey.start_time, now or self._now(), self._policy)

    def is_finished(self) -> bool:
        return self._sim.status is SimulationStatus.COMPLETED

    # ── Publishing ────────────────────────────────────────────────────────────

    def _on_snapshot(self, snapshot: SimulationSnapshot) -> None:
        payload = snapshot.to_dict()
        payload["vehicle_id"] = self._vehicle_id
        self._bus.publish(TOPIC_POSITION, self._vehicle_id, payload)

        if snapshot.status is not self._last_status:
            self._last_status = snapshot.status
            self._bus.publish(
                TOPIC_STATUS,
                self._vehicle_id,
                {"vehicle_id": self._vehicle_id, "status": _STATUS_LABELS[snapshot.status]},
            )
            log.info("status -> %s", _STATUS_LABELS[snapshot.status])
