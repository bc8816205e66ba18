#!/usr/bin/env python3
"""
Tests for the nominal elapsed-time arrival estimate.
"""

from __future__ import annotations

import unittest
from datetime import datetime, timedelta, timezone

from sim.eta import estimated_arrival, remaining_minutes
from sim.traffic_policy import CorridorPolicy

_START = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


class RemainingMinutesTests(unittest.TestCase):
    def test_partial_minute_is_not_counted(self) -> None:
        self.assertEqual(remaining_minutes(_START, _START + timedelta(seconds=59)), 15)

    def test_whole_minutes_are_subtracted(self) -> None:
        self.assertEqual(remaining_minutes(_START, _START + timedelta(minutes=5, seconds=30)), 10)
        self.assertEqual(remaining_minutes(_START, _START + timedelta(minutes=15)), 0)

    def test_never_negative(self) -> None:
        self.assertEqual(remaining_minutes(_START, _START + timedelta(minutes=20)), 0)

    def test_clock_before_start_counts_as_zero_elapsed(self) -> None:
        self.assertEqual(remaining_minutes(_START, _START - timedelta(minutes=3)), 15)

    def test_nominal_length_is_configurable(self) -> None:
        policy = CorridorPolicy(nominal_journey_min=30)
        self.assertEqual(remaining_minutes(_START, _START + timedelta(minutes=12), policy), 18)


class EstimatedArrivalTests(unittest.TestCase):
    def test_fifteen_minutes_after_start(self) -> None:
        self.assertEqual(estimated_arrival(_START), _START + timedelta(minutes=15))


if __name__ == "__main__":
    unittest.main()
