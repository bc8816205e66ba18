#!/usr/bin/env python3
"""
sim/gazetteer.py
================
Static place-name table for Bengaluru and the free-text resolver built
on it, plus the named traffic signals met when leaving each pickup area.

Matching is case-insensitive substring containment against each key in
table order; the first key contained in the input wins.  Order is
therefore part of the contract: a name such as ``"MG Road near Manipal
Hospital"`` resolves to ``mg road`` because that key comes first.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from sim.geo import Coordinate

log = logging.getLogger(__name__)

GazetteerEntry = Tuple[str, Coordinate]

CITY_CENTER: Coordinate = Coordinate(12.9716, 77.5946)

GAZETTEER: Tuple[GazetteerEntry, ...] = (
    # ── Areas ──────────────────────────────────────────────────────────
    ("vv puram",               Coordinate(12.9395, 77.5831)),
    ("mg road",                Coordinate(12.9716, 77.6197)),
    ("whitefield",             Coordinate(12.9698, 77.7500)),
    ("jayanagar",              Coordinate(12.9279, 77.5937)),
    ("koramangala",            Coordinate(12.9352, 77.6245)),
    ("hebbal",                 Coordinate(13.0358, 77.5970)),
    ("yeshwanthpur",           Coordinate(13.0284, 77.5385)),
    ("rajajinagar",            Coordinate(12.9899, 77.5533)),
    # ── Hospitals ──────────────────────────────────────────────────────
    ("chord road hospital",    Coordinate(12.9850, 77.5600)),
    ("st. martha's hospital",  Coordinate(12.9750, 77.6180)),
    ("columbia asia hospital", Coordinate(12.9780, 77.7550)),
    ("jayadeva institute",     Coordinate(12.9150, 77.5980)),
    ("manipal hospital",       Coordinate(12.9600, 77.6480)),
    ("aster cmi hospital",     Coordinate(13.0450, 77.6050)),
    ("sapthagiri hospital",    Coordinate(13.0250, 77.5250)),
    ("bgs global hospital",    Coordinate(12.8900, 77.5000)),
    ("shankar netralaya",      Coordinate(12.9710, 77.6380)),
    ("narayana health city",   Coordinate(12.8600, 77.6800)),
)


def resolve(
    name: Optional[str],
    gazetteer: Sequence[GazetteerEntry] = GAZETTEER,
    default: Coordinate = CITY_CENTER,
) -> Coordinate:
    """Map free text to a coordinate; never raises.

    Parameters
    ----------
    name : str or None
        Arbitrary user input, possibly empty.
    gazetteer : sequence of (key, Coordinate)
        Lower-case keys, tested in order.
    default : Coordinate
        Returned when no key is contained in *name*.
    """
    text = (name or "").lower()
    for key, coord in gazetteer:
        if key in text:
            return coord
    log.debug("no gazetteer match for %r, using default %s", name, default)
    return default


def place_names(gazetteer: Sequence[GazetteerEntry] = GAZETTEER) -> Tuple[str, ...]:
    """Keys of *gazetteer* in match order."""
    return tuple(key for key, _ in gazetteer)


# ── Named signals per pickup area ─────────────────────────────────────────────
# Matched against the pickup text exactly like GAZETTEER: first key contained
# in the input wins.

SignalNamesEntry = Tuple[str, Tuple[str, ...]]

SIGNAL_NAMES: Tuple[SignalNamesEntry, ...] = (
    ("mg road", (
        "Trinity Metro Station Signal",
        "Forum Mall Junction",
        "Residency Road Cross",
        "Richmond Circle",
        "Brigade Road Junction",
    )),
    ("rajajinagar", (
        "Rajajinagar 2nd Block Signal",
        "Mantri Mall Signal",
        "Chord Road Junction",
        "Rajajinagar Metro Signal",
        "Chord Road Hospital",
    )),
    ("whitefield", (
        "ITPL Main Gate Signal",
        "Whitefield Main Road Signal",
        "Varthur Kodi Junction",
        "Marathahalli Bridge",
        "Kundalahalli Signal",
    )),
    ("jayanagar", (
        "Jayanagar 4th Block Signal",
        "South End Circle",
        "Lalbagh West Gate Signal",
        "Wilson Garden Signal",
    )),
    ("koramangala", (
        "Koramangala 5th Block Signal",
        "Sony World Signal",
        "Koramangala Water Tank Signal",
        "Sarjapur Main Road Junction",
    )),
    ("hebbal", (
        "Hebbal Flyover Signal",
        "Manyata Tech Park Signal",
        "Outer Ring Road Junction",
        "Nagawara Signal",
    )),
    ("vv puram", (
        "VV Puram Food Street Signal",
        "Sajjan Rao Circle",
        "National College Metro Signal",
        "Basavanagudi Police Station",
    )),
    ("yeshwanthpur", (
        "Yeshwanthpur Railway Station",
        "Govardhan Theatre Signal",
        "Orion Mall Junction",
        "RMC Yard",
    )),
)

DEFAULT_SIGNAL_NAMES: Tuple[str, ...] = (
    "Major Junction Signal 1",
    "City Center Signal",
    "Hospital Route Signal",
    "Emergency Corridor Signal",
)


def signal_names_for(
    pickup: Optional[str],
    table: Sequence[SignalNamesEntry] = SIGNAL_NAMES,
    default: Tuple[str, ...] = DEFAULT_SIGNAL_NAMES,
) -> Tuple[str, ...]:
    """Ordered signal names en route from *pickup*; *default* when nothing matches."""
    text = (pickup or "").lower()
    for key, names in table:
        if key in text:
            return names
    return default
