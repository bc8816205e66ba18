#!/usr/bin/env python3
"""
sim/traffic_policy.py
=====================
Tunable route, traffic and signal parameters for the corridor
simulation.  Every constant lives in the frozen :class:`CorridorPolicy`
dataclass so that experiments can swap policies without touching code.

Also provides :class:`TrafficDensity`, the three-level density label
shared by the zone model, the bridge and the UI.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class TrafficDensity(str, Enum):
    """Synthetic traffic density classification."""

    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"


@dataclass(frozen=True)
class CorridorPolicy:
    """Immutable bag of every tunable simulation parameter.

    Groups: path geometry, traffic zones, signal handling,
    critical-run modifiers, display estimates.
    """

    # ── Path geometry ─────────────────────────────────────────────────────
    curve_intensity: float = 0.1
    """Perpendicular offset of the Bézier control point, in degrees."""

    interior_samples: int = 50
    """Number of interpolated points between origin and destination."""

    earth_radius_km: float = 6371.0
    """Mean Earth radius used by the haversine distance."""

    # ── Traffic zones ─────────────────────────────────────────────────────
    moderate_from: float = 0.3
    """Progress fraction at which traffic turns moderate."""

    heavy_from: float = 0.6
    """Progress fraction at which traffic turns heavy."""

    light_speed_kmh: float = 65.0
    moderate_speed_kmh: float = 45.0
    heavy_speed_kmh: float = 30.0

    light_step_ms: float = 1200.0
    moderate_step_ms: float = 1800.0
    heavy_step_ms: float = 2400.0

    # ── Signals ───────────────────────────────────────────────────────────
    signal_positions: Tuple[float, ...] = (0.20, 0.35, 0.50, 0.65, 0.80)
    """Route-relative positions of the traffic signals."""

    signal_clear_lead: float = 0.05
    """A signal turns green this far (as a fraction) before the vehicle reaches it."""

    signal_proximity: float = 0.03
    """Progress window around a signal inside which the vehicle slows down."""

    final_stretch: float = 0.98
    """No signal slowdown at or beyond this progress fraction."""

    signal_slowdown_kmh: float = 20.0
    signal_min_speed_kmh: float = 10.0
    signal_step_factor: float = 1.5

    # ── Critical runs ─────────────────────────────────────────────────────
    critical_step_factor: float = 0.8
    critical_boost_kmh: float = 15.0
    critical_max_speed_kmh: float = 80.0

    # ── Display estimates ─────────────────────────────────────────────────
    nominal_journey_min: float = 15.0
    """Fixed journey length assumed by the elapsed-time ETA estimate."""

    signal_delay_min: float = 2.0
    signal_delay_max: float = 4.0
    """Per-signal bounds, in minutes, of the time spent at named signals."""


DEFAULT_POLICY = CorridorPolicy()
