#!/usr/bin/env python3
"""
sim/eta.py
==========
Elapsed-time arrival estimate shown to hospital-side observers.

This estimate assumes a fixed nominal journey length and ignores both the
route and the simulated speed, so it can disagree with the
:class:`~sim.motion.MotionSimulator` timeline.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Optional, Tuple

from sim.traffic_policy import DEFAULT_POLICY, CorridorPolicy


def estimated_arrival(
    start_time: datetime, policy: Optional[CorridorPolicy] = None
) -> datetime:
    """Wall-clock arrival time: start plus the nominal journey length."""
    return start_time + timedelta(minutes=(policy or DEFAULT_POLICY).nominal_journey_min)


def remaining_minutes(
    start_time: datetime,
    now: datetime,
    policy: Optional[CorridorPolicy] = None,
) -> float:
    """``max(0, nominal - whole elapsed minutes)``.

    Elapsed time is floored to whole minutes; a clock that reads earlier
    than *start_time* counts as no time elapsed.
    """
    nominal = (policy or DEFAULT_POLICY).nominal_journey_min
    elapsed = max(0, math.floor((now - start_time).total_seconds() / 60.0))
    return max(0.0, nominal - elapsed)


def signal_delay_range(
    signal_count: int, policy: Optional[CorridorPolicy] = None
) -> Tuple[float, float]:
    """``(low, high)`` minutes spent crossing *signal_count* named signals."""
    p = policy or DEFAULT_POLICY
    count = max(0, signal_count)
    return count * p.signal_delay_min, count * p.signal_delay_max
