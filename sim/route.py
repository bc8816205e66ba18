#!/usr/bin/env python3
"""
sim/route.py
============
Curved route generation between two coordinates.

A :class:`Route` is an immutable waypoint sequence that always starts at
the origin and ends at the destination.  :func:`generate_route` bends it
with a single quadratic Bézier whose control point sits perpendicular to
the origin → destination segment, offset from its midpoint.
"""

from __future__ import annotations

import math
from typing import Iterator, Optional, Sequence, Tuple

from sim.geo import Coordinate, midpoint, planar_bearing, quadratic_bezier
from sim.traffic_policy import DEFAULT_POLICY, CorridorPolicy


class Route:
    """Ordered, non-empty, immutable sequence of waypoints.

    Parameters
    ----------
    waypoints : sequence of Coordinate
        Origin first, destination last.

    Raises
    ------
    ValueError
        If *waypoints* is empty.
    """

    __slots__ = ("_waypoints",)

    def __init__(self, waypoints: Sequence[Coordinate]) -> None:
        if not waypoints:
            raise ValueError("a route needs at least one waypoint")
        self._waypoints: Tuple[Coordinate, ...] = tuple(waypoints)

    @property
    def waypoints(self) -> Tuple[Coordinate, ...]:
        return self._waypoints

    @property
    def origin(self) -> Coordinate:
        return self._waypoints[0]

    @property
    def destination(self) -> Coordinate:
        return self._waypoints[-1]

    @property
    def last_index(self) -> int:
        return len(self._waypoints) - 1

    def at_fraction(self, fraction: float) -> Coordinate:
        """Waypoint at ``floor(fraction * len(route))``, clamped to the last index."""
        idx = int(math.floor(fraction * len(self._waypoints)))
        return self._waypoints[max(0, min(idx, self.last_index))]

    def __len__(self) -> int:
        return len(self._waypoints)

    def __getitem__(self, index: int) -> Coordinate:
        return self._waypoints[index]

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self._waypoints)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Route):
            return NotImplemented
        return self._waypoints == other._waypoints

    def __hash__(self) -> int:
        return hash(self._waypoints)

    def __repr__(self) -> str:
        return f"Route({len(self)} waypoints, {self.origin} -> {self.destination})"


def control_point(
    origin: Coordinate,
    destination: Coordinate,
    policy: Optional[CorridorPolicy] = None,
) -> Coordinate:
    """Bézier control point for the (origin, destination) pair.

    Coincident end points have no defined direction, so the control
    point collapses onto the origin and the route degenerates to a
    single repeated coordinate.
    """
    if origin == destination:
        return origin
    policy = policy or DEFAULT_POLICY
    mid = midpoint(origin, destination)
    angle = planar_bearing(origin, destination)
    return Coordinate(
        mid.lat + policy.curve_intensity * math.cos(angle),
        mid.lon - policy.curve_intensity * math.sin(angle),
    )


def generate_route(
    origin: Coordinate,
    destination: Coordinate,
    policy: Optional[CorridorPolicy] = None,
) -> Route:
    """Build the curved route ``[origin, *samples, destination]``.

    Interior samples are taken at ``t = i / (n + 1)`` for ``i = 1..n``
    where ``n`` is ``policy.interior_samples``, so end points are never
    perturbed.
    """
    policy = policy or DEFAULT_POLICY
    ctrl = control_point(origin, destination, policy)
    n = policy.interior_samples
    samples = [
        quadratic_bezier(origin, ctrl, destination, i / (n + 1))
        for i in range(1, n + 1)
    ]
    return Route([origin, *samples, destination])
