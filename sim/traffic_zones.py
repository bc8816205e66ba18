#!/usr/bin/env python3
"""
sim/traffic_zones.py
====================
Progress-keyed synthetic traffic model.

The route is split into three fixed bands of completion fraction; each
band carries a density label, a base speed and a base tick duration.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sim.traffic_policy import DEFAULT_POLICY, CorridorPolicy, TrafficDensity


@dataclass(frozen=True)
class TrafficZone:
    """Traffic conditions for one progress band."""

    density: TrafficDensity
    base_speed_kmh: float
    base_step_ms: float


def zone_for(progress: float, policy: Optional[CorridorPolicy] = None) -> TrafficZone:
    """Return the :class:`TrafficZone` for a completion fraction in ``[0, 1)``.

    ========== ======== ====== ========
    progress   density  km/h   step ms
    ========== ======== ====== ========
    [0, 0.3)   light    65     1200
    [0.3, 0.6) moderate 45     1800
    [0.6, 1)   heavy    30     2400
    ========== ======== ====== ========
    """
    p = policy or DEFAULT_POLICY
    if progress < p.moderate_from:
        return TrafficZone(TrafficDensity.LIGHT, p.light_speed_kmh, p.light_step_ms)
    if progress < p.heavy_from:
        return TrafficZone(TrafficDensity.MODERATE, p.moderate_speed_kmh, p.moderate_step_ms)
    return TrafficZone(TrafficDensity.HEAVY, p.heavy_speed_kmh, p.heavy_step_ms)
