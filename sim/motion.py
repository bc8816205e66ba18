#!/usr/bin/env python3
"""
sim/motion.py
=============
Variable-rate stepping engine that moves one vehicle along a
:class:`~sim.route.Route`.

State machine::

    IDLE --start()--> RUNNING --last waypoint--> COMPLETED
      ^                  |                            |
      +------stop()------+----------stop()------------+
                                   start() restarts from index 0

Every tick looks up the traffic zone for the current progress, applies
the signal slowdown and the critical-run boost, advances one waypoint,
publishes an immutable :class:`SimulationSnapshot` and schedules the next
tick after the step duration it just computed.  Exactly one timer is
pending per instance; every resetting transition cancels it first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from sim.geo import Coordinate
from sim.route import Route
from sim.scheduler import Cancellable, Scheduler
from sim.signals import SignalState, is_near_signal, signal_states
from sim.traffic_policy import DEFAULT_POLICY, CorridorPolicy, TrafficDensity
from sim.traffic_zones import zone_for

log = logging.getLogger("motion")


class SimulationStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass(frozen=True)
class StepPlan:
    """Speed and tick duration computed for one step."""

    density: TrafficDensity
    speed_kmh: float
    step_ms: float
    near_signal: bool


def plan_step(
    progress: float,
    critical: bool,
    policy: Optional[CorridorPolicy] = None,
) -> StepPlan:
    """Combine zone, signal proximity and priority into one :class:`StepPlan`.

    Parameters
    ----------
    progress : float
        Completion fraction before the step, ``index / len(route)``.
    critical : bool
        Apply the emergency speed-up.
    policy : CorridorPolicy or None
        Tunable constants.
    """
    p = policy or DEFAULT_POLICY
    zone = zone_for(progress, p)
    speed = zone.base_speed_kmh
    step_ms = zone.base_step_ms

    near = is_near_signal(progress, p)
    if near:
        speed = max(p.signal_min_speed_kmh, speed - p.signal_slowdown_kmh)
        step_ms *= p.signal_step_factor

    if critical:
        step_ms *= p.critical_step_factor
        speed = min(p.critical_max_speed_kmh, speed + p.critical_boost_kmh)

    return StepPlan(zone.density, speed, step_ms, near)


@dataclass(frozen=True)
class SimulationSnapshot:
    """Published, read-only view of the simulation state.

    Attributes
    ----------
    position_index : int
        Index of the current waypoint.
    position : Coordinate or None
        Current waypoint; ``None`` only when no route is loaded.
    progress_percent : float
        ``100 * index / len(route)`` while running, exactly 100 once completed.
    speed_kmh : float
        Simulated speed; 0 when idle or completed.
    density : TrafficDensity or None
        Traffic density of the last computed step.
    status : SimulationStatus
    step_ms : float
        Delay before the next tick (or of the last tick once completed).
    critical : bool
        Whether the emergency speed-up applied to the last step.
    """

    position_index: int
    position: Optional[Coordinate]
    progress_percent: float
    speed_kmh: float
    density: Optional[TrafficDensity]
    status: SimulationStatus
    step_ms: float = 0.0
    critical: bool = False

    @property
    def progress_fraction(self) -> float:
        return self.progress_percent / 100.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position_index": self.position_index,
            "position": self.position.as_list() if self.position else None,
            "progress_percent": self.progress_percent,
            "speed_kmh": self.speed_kmh,
            "density": self.density.value if self.density else None,
            "status": self.status.value,
            "step_ms": self.step_ms,
            "critical": self.critical,
        }


SnapshotListener = Callable[[SimulationSnapshot], None]


class MotionSimulator:
    """Owns the only mutable simulation state and its single pending timer.

    Parameters
    ----------
    scheduler : Scheduler
        Anything with ``call_later(delay_s, callback)`` returning a
        cancellable handle: a :class:`~sim.scheduler.VirtualClock` or a
        running :mod:`asyncio` loop.
    route : Route or None
        Route to animate; can be replaced with :meth:`set_route`.
    critical : bool
        Emergency flag applied from the next computed step.
    policy : CorridorPolicy or None
        Tunable constants.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        route: Optional[Route] = None,
        critical: bool = False,
        policy: Optional[CorridorPolicy] = None,
    ) -> None:
        self._scheduler = scheduler
        self._policy = policy or DEFAULT_POLICY
        self._route = route
        self._critical = bool(critical)
        self._index = 0
        self._handle: Optional[Cancellable] = None
        self._disposed = False
        self._listeners: List[SnapshotListener] = []
        self._snapshot = self._idle_snapshot()

    # ── Properties ────────────────────────────────────────────────────────────

    @property
    def route(self) -> Optional[Route]:
        return self._route

    @property
    def critical(self) -> bool:
        return self._critical

    @property
    def policy(self) -> CorridorPolicy:
        return self._policy

    @property
    def status(self) -> SimulationStatus:
        return self._snapshot.status

    @property
    def disposed(self) -> bool:
        return self._disposed

    # ── Observers ─────────────────────────────────────────────────────────────

    def add_listener(self, listener: SnapshotListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: SnapshotListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ── Inputs ────────────────────────────────────────────────────────────────

    def set_route(self, route: Optional[Route]) -> None:
        """Replace the route; any run in progress is discarded."""
        self._cancel_pending()
        self._index = 0
        self._route = route
        self._publish(self._idle_snapshot())

    def set_critical(self, critical: bool) -> None:
        """Change the emergency flag; the already scheduled tick keeps its delay."""
        self._critical = bool(critical)

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def start(self) -> bool:
        """Begin (or rerun) the stepping loop from the first waypoint.

        Returns
        -------
        bool
            False when there is nothing to animate or the simulator was disposed.
        """
        if self._disposed:
            log.warning("start() ignored: simulator disposed")
            return False
        if self._route is None or len(self._route) < 2:
            log.info("start() ignored: route too short to animate")
            return False

        self._cancel_pending()
        self._index = 0
        plan = plan_step(0.0, self._critical, self._policy)
        self._publish(SimulationSnapshot(
            position_index=0,
            position=self._route[0],
            progress_percent=0.0,
            speed_kmh=0.0,
            density=plan.density,
            status=SimulationStatus.RUNNING,
            step_ms=plan.step_ms,
            critical=self._critical,
        ), next_step_ms=plan.step_ms)
        log.info("motion started: %d waypoints critical=%s", len(self._route), self._critical)
        return True

    def stop(self) -> None:
        """Cancel ticking and discard progress (not a pause)."""
        self._cancel_pending()
        self._index = 0
        if self._snapshot.status is SimulationStatus.IDLE:
            return
        self._publish(self._idle_snapshot())
        log.info("motion stopped")

    def dispose(self) -> None:
        """Stop for good; no callback fires after this returns."""
        self.stop()
        self._listeners.clear()
        self._disposed = True

    # ── Read side ─────────────────────────────────────────────────────────────

    def snapshot(self) -> SimulationSnapshot:
        return self._snapshot

    def signal_states(self) -> List[SignalState]:
        return signal_states(self._snapshot.progress_fraction, self._policy)

    # ── Internals ─────────────────────────────────────────────────────────────

    def _idle_snapshot(self) -> SimulationSnapshot:
        return SimulationSnapshot(
            position_index=0,
            position=self._route[0] if self._route else None,
            progress_percent=0.0,
            speed_kmh=0.0,
            density=None,
            status=SimulationStatus.IDLE,
            critical=self._critical,
        )

    def _schedule(self, step_ms: float) -> None:
        self._handle = self._scheduler.call_later(step_ms / 1000.0, self._tick)

    def _cancel_pending(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _tick(self) -> None:
        self._handle = None
        route = self._route
        total = len(route)
        plan = plan_step(self._index / total, self._critical, self._policy)
        self._index += 1

        if self._index >= route.last_index:
            self._index = route.last_index
            self._publish(SimulationSnapshot(
                position_index=self._index,
                position=route[self._index],
                progress_percent=100.0,
                speed_kmh=0.0,
                density=plan.density,
                status=SimulationStatus.COMPLETED,
                step_ms=plan.step_ms,
                critical=self._critical,
            ))
            log.info("motion completed at waypoint %d", self._index)
            return

        self._publish(SimulationSnapshot(
            position_index=self._index,
            position=route[self._index],
            progress_percent=100.0 * self._index / total,
            speed_kmh=plan.speed_kmh,
            density=plan.density,
            status=SimulationStatus.RUNNING,
            step_ms=plan.step_ms,
            critical=self._critical,
        ), next_step_ms=plan.step_ms)
        log.debug(
            "tick idx=%d density=%s speed=%.0f next=%.0fms near_signal=%s",
            self._index, plan.density.value, plan.speed_kmh, plan.step_ms, plan.near_signal,
        )

    def _publish(
        self, snapshot: SimulationSnapshot, next_step_ms: Optional[float] = None
    ) -> None:
        # Timer is armed before notifying; listeners may call stop().
        self._snapshot = snapshot
        if next_step_ms is not None:
            self._schedule(next_step_ms)
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                log.exception("snapshot listener failed")
