#!/usr/bin/env python3
"""
Tests for the progress-keyed traffic zones, signal clearing and step planning.
"""

from __future__ import annotations

import unittest

from sim.eta import signal_delay_range
from sim.gazetteer import DEFAULT_SIGNAL_NAMES, signal_names_for
from sim.motion import plan_step
from sim.route import generate_route
from sim.geo import Coordinate
from sim.signals import is_near_signal, signal_markers, signal_states
from sim.traffic_policy import CorridorPolicy, TrafficDensity
from sim.traffic_zones import zone_for


class TrafficZoneTests(unittest.TestCase):
    def test_zone_boundaries(self) -> None:
        light = zone_for(0.29)
        self.assertEqual(
            (light.density, light.base_speed_kmh, light.base_step_ms),
            (TrafficDensity.LIGHT, 65.0, 1200.0),
        )
        moderate = zone_for(0.30)
        self.assertEqual(
            (moderate.density, moderate.base_speed_kmh, moderate.base_step_ms),
            (TrafficDensity.MODERATE, 45.0, 1800.0),
        )
        self.assertIs(zone_for(0.59).density, TrafficDensity.MODERATE)
        heavy = zone_for(0.60)
        self.assertEqual(
            (heavy.density, heavy.base_speed_kmh, heavy.base_step_ms),
            (TrafficDensity.HEAVY, 30.0, 2400.0),
        )

    def test_start_and_end_of_route(self) -> None:
        self.assertIs(zone_for(0.0).density, TrafficDensity.LIGHT)
        self.assertIs(zone_for(0.999).density, TrafficDensity.HEAVY)


class SignalTests(unittest.TestCase):
    def test_anticipatory_clearing(self) -> None:
        self.assertTrue(signal_states(0.16)[0].cleared)
        self.assertFalse(signal_states(0.14)[0].cleared)

    def test_five_fixed_positions(self) -> None:
        states = signal_states(0.0)
        self.assertEqual([s.position for s in states], [0.20, 0.35, 0.50, 0.65, 0.80])
        self.assertEqual([s.index for s in states], [0, 1, 2, 3, 4])
        self.assertFalse(any(s.cleared for s in states))
        self.assertTrue(all(s.cleared for s in signal_states(1.0)))

    def test_clearing_is_monotonic(self) -> None:
        previous = [False] * 5
        for step in range(0, 101):
            current = [s.cleared for s in signal_states(step / 100)]
            for before, now in zip(previous, current):
                self.assertFalse(before and not now)
            previous = current

    def test_near_signal_window(self) -> None:
        self.assertTrue(is_near_signal(0.18))
        self.assertTrue(is_near_signal(0.52))
        self.assertFalse(is_near_signal(0.10))
        self.assertFalse(is_near_signal(0.25))

    def test_no_slowdown_in_final_stretch(self) -> None:
        policy = CorridorPolicy(signal_positions=(0.99,))
        self.assertTrue(is_near_signal(0.975, policy))
        self.assertFalse(is_near_signal(0.985, policy))

    def test_markers_sit_on_route(self) -> None:
        route = generate_route(Coordinate(12.9716, 77.6197), Coordinate(12.9850, 77.5600))
        markers = signal_markers(route, 0.4)
        self.assertEqual(len(markers), 5)
        self.assertEqual(markers[0]["location"], route[10].as_list())
        self.assertEqual(markers[2]["location"], route[26].as_list())
        self.assertEqual([m["state"] for m in markers], ["GREEN", "GREEN", "RED", "RED", "RED"])


class SignalNameTests(unittest.TestCase):
    def test_pickup_area_selects_named_list(self) -> None:
        names = signal_names_for("Pickup at MG Road metro")
        self.assertEqual(len(names), 5)
        self.assertEqual(names[0], "Trinity Metro Station Signal")
        self.assertEqual(names[-1], "Brigade Road Junction")
        self.assertEqual(signal_names_for("HEBBAL")[0], "Hebbal Flyover Signal")

    def test_unmatched_pickup_uses_default_list(self) -> None:
        self.assertEqual(signal_names_for("Somewhere else"), DEFAULT_SIGNAL_NAMES)
        self.assertEqual(signal_names_for(None), DEFAULT_SIGNAL_NAMES)
        self.assertEqual(DEFAULT_SIGNAL_NAMES[0], "Major Junction Signal 1")

    def test_short_list_labels_leftover_positions(self) -> None:
        states = signal_states(0.0, names=signal_names_for("Jayanagar"))
        self.assertEqual(
            [s.name for s in states],
            [
                "Jayanagar 4th Block Signal",
                "South End Circle",
                "Lalbagh West Gate Signal",
                "Wilson Garden Signal",
                "Signal 5",
            ],
        )
        self.assertEqual(signal_states(0.0)[2].name, "Signal 3")
        self.assertEqual(states[0].to_dict()["name"], "Jayanagar 4th Block Signal")

    def test_delay_range_scales_with_named_signals(self) -> None:
        self.assertEqual(signal_delay_range(5), (10.0, 20.0))
        self.assertEqual(signal_delay_range(len(DEFAULT_SIGNAL_NAMES)), (8.0, 16.0))
        self.assertEqual(signal_delay_range(0), (0.0, 0.0))


class StepPlanTests(unittest.TestCase):
    def test_plain_zone_values(self) -> None:
        plan = plan_step(0.1, critical=False)
        self.assertEqual((plan.speed_kmh, plan.step_ms, plan.near_signal), (65.0, 1200.0, False))

    def test_signal_slowdown(self) -> None:
        plan = plan_step(0.2, critical=False)
        self.assertTrue(plan.near_signal)
        self.assertEqual(plan.speed_kmh, 45.0)
        self.assertAlmostEqual(plan.step_ms, 1800.0)

    def test_signal_slowdown_speed_floor(self) -> None:
        plan = plan_step(0.65, critical=False)
        self.assertIs(plan.density, TrafficDensity.HEAVY)
        self.assertEqual(plan.speed_kmh, 10.0)
        self.assertAlmostEqual(plan.step_ms, 3600.0)

    def test_critical_is_faster(self) -> None:
        normal = plan_step(0.1, critical=False)
        critical = plan_step(0.1, critical=True)
        self.assertLess(critical.step_ms, normal.step_ms)
        self.assertGreater(critical.speed_kmh, normal.speed_kmh)
        self.assertAlmostEqual(critical.step_ms, 960.0)
        self.assertEqual(critical.speed_kmh, 80.0)

    def test_critical_speed_ceiling(self) -> None:
        policy = CorridorPolicy(light_speed_kmh=75.0)
        self.assertEqual(plan_step(0.1, critical=True, policy=policy).speed_kmh, 80.0)

    def test_critical_near_signal(self) -> None:
        plan = plan_step(0.2, critical=True)
        self.assertEqual(plan.speed_kmh, 60.0)
        self.assertAlmostEqual(plan.step_ms, 1440.0)


if __name__ == "__main__":
    unittest.main()
