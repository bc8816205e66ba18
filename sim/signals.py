#!/usr/bin/env python3
"""
sim/signals.py
==============
Route-relative traffic signals.

Signal state is never stored: it is derived from the current progress
fraction, which keeps clearing monotonic for a run and lets a restart
turn every signal red again simply by resetting progress.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from sim.route import Route
from sim.traffic_policy import DEFAULT_POLICY, CorridorPolicy


@dataclass(frozen=True)
class SignalState:
    """Derived state of one signal."""

    index: int
    position: float
    cleared: bool
    name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "name": self.name,
            "position": self.position,
            "cleared": self.cleared,
            "state": "GREEN" if self.cleared else "RED",
        }


def signal_name(index: int, names: Optional[Sequence[str]] = None) -> str:
    """Display name of the signal at *index*.

    Positions beyond the end of *names* are labelled ``"Signal <n>"``
    (1-based).
    """
    if names and index < len(names):
        return names[index]
    return f"Signal {index + 1}"


def signal_states(
    progress: float,
    policy: Optional[CorridorPolicy] = None,
    names: Optional[Sequence[str]] = None,
) -> List[SignalState]:
    """Pass/fail state of every signal for a completion fraction.

    A signal is cleared once ``progress > position - signal_clear_lead``,
    i.e. it turns green shortly before the vehicle reaches it.
    """
    p = policy or DEFAULT_POLICY
    return [
        SignalState(i, pos, progress > pos - p.signal_clear_lead, signal_name(i, names))
        for i, pos in enumerate(p.signal_positions)
    ]


def is_near_signal(progress: float, policy: Optional[CorridorPolicy] = None) -> bool:
    """True if any signal lies strictly within the proximity window.

    Cleared state is ignored.  Always False in the final stretch so the
    vehicle is never held back on its way to 100 %.
    """
    p = policy or DEFAULT_POLICY
    if progress >= p.final_stretch:
        return False
    return any(abs(progress - pos) < p.signal_proximity for pos in p.signal_positions)


def signal_markers(
    route: Route,
    progress: float,
    policy: Optional[CorridorPolicy] = None,
    names: Optional[Sequence[str]] = None,
) -> List[Dict[str, Any]]:
    """Signal states enriched with their geographic location on *route*."""
    markers: List[Dict[str, Any]] = []
    for state in signal_states(progress, policy, names):
        entry = state.to_dict()
        entry["location"] = route.at_fraction(state.position).as_list()
        markers.append(entry)
    return markers
