#!/usr/bin/env python3
"""
sim/geo.py
==========
Low-level geographic helpers used by :mod:`sim.route` and :mod:`sim.sim_bridge`.

Keeping these in a separate module avoids circular imports and makes unit
testing straightforward.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional

from sim.traffic_policy import DEFAULT_POLICY, CorridorPolicy


@dataclass(frozen=True)
class Coordinate:
    """Immutable (latitude, longitude) pair in decimal degrees."""

    lat: float
    lon: float

    def as_list(self) -> List[float]:
        return [self.lat, self.lon]


def distance_km(
    a: Coordinate,
    b: Coordinate,
    policy: Optional[CorridorPolicy] = None,
) -> float:
    """Great-circle (haversine) distance between *a* and *b*.

    Parameters
    ----------
    a, b : Coordinate
        End points in decimal degrees.
    policy : CorridorPolicy or None
        Supplies the Earth radius.

    Returns
    -------
    float
        Distance in kilometres; ``0.0`` when ``a == b``.
    """
    radius = (policy or DEFAULT_POLICY).earth_radius_km
    d_lat = math.radians(b.lat - a.lat)
    d_lon = math.radians(b.lon - a.lon)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat))
        * math.cos(math.radians(b.lat))
        * math.sin(d_lon / 2) ** 2
    )
    return radius * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def planar_bearing(a: Coordinate, b: Coordinate) -> float:
    """Angle (radians) of the segment *a* → *b* in the lon/lat plane.

    Measured as ``atan2(Δlat, Δlon)``; this is not a compass bearing.
    """
    return math.atan2(b.lat - a.lat, b.lon - a.lon)


def midpoint(a: Coordinate, b: Coordinate) -> Coordinate:
    """Arithmetic midpoint in degree space."""
    return Coordinate((a.lat + b.lat) / 2, (a.lon + b.lon) / 2)


def quadratic_bezier(
    p0: Coordinate, p1: Coordinate, p2: Coordinate, t: float
) -> Coordinate:
    """Point at parameter *t* on the quadratic Bézier (p0, p1, p2)."""
    u = 1.0 - t
    return Coordinate(
        u * u * p0.lat + 2 * u * t * p1.lat + t * t * p2.lat,
        u * u * p0.lon + 2 * u * t * p1.lon + t * t * p2.lon,
    )
