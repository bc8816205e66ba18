#!/usr/bin/env python3
"""
End-to-end tests for SimBridge: place names in, bus messages and snapshots out.
"""

from __future__ import annotations

import unittest
from datetime import datetime, timedelta, timezone
from typing import List

from bus.journey_bus import JourneyBus, TOPIC_JOURNEY, TOPIC_POSITION, TOPIC_STATUS
from bus.message import BusMessage
from sim.geo import Coordinate
from sim.motion import SimulationStatus
from sim.scheduler import VirtualClock
from sim.sim_bridge import SimBridge

_START = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


class SimBridgeTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = VirtualClock()
        self.bus = JourneyBus()
        self.bridge = SimBridge(self.clock, bus=self.bus, now=lambda: _START)
        self.statuses: List[str] = []
        self.bus.subscribe(TOPIC_STATUS, lambda m: self.statuses.append(m.payload["status"]))

    def tearDown(self) -> None:
        self.bridge.dispose()

    def test_configure_resolves_and_builds_route(self) -> None:
        summary = self.bridge.configure("MG Road", "Chord Road Hospital", False)
        self.assertEqual(summary["origin"]["location"], [12.9716, 77.6197])
        self.assertEqual(summary["destination"]["location"], [12.9850, 77.5600])
        self.assertEqual(summary["waypoint_count"], 52)
        self.assertFalse(summary["critical"])
        self.assertGreater(summary["distance_km"], 6.0)

        snap = self.bridge.snapshot()
        self.assertIs(snap.status, SimulationStatus.IDLE)
        self.assertEqual(snap.position, Coordinate(12.9716, 77.6197))

    def test_unknown_names_use_city_center(self) -> None:
        summary = self.bridge.configure("Nowhere", "", False)
        self.assertEqual(summary["origin"]["location"], [12.9716, 77.5946])
        self.assertEqual(summary["destination"]["location"], [12.9716, 77.5946])
        self.assertEqual(summary["distance_km"], 0.0)
        self.assertTrue(self.bridge.start())
        self.clock.run_until_idle()
        self.assertTrue(self.bridge.is_finished())

    def test_start_before_configure_is_rejected(self) -> None:
        self.assertFalse(self.bridge.start())
        self.assertEqual(self.bus.poll(TOPIC_JOURNEY), [])

    def test_full_journey_on_the_bus(self) -> None:
        self.bridge.configure("MG Road", "Chord Road Hospital", False)
        self.bus.poll(TOPIC_POSITION)
        self.assertTrue(self.bridge.start())

        journeys = self.bus.poll(TOPIC_JOURNEY)
        self.assertEqual(len(journeys), 1)
        payload = journeys[0].payload
        self.assertEqual(payload["vehicle_id"], "AMB_01")
        self.assertEqual(payload["pickup_location"], "MG Road")
        self.assertEqual(payload["drop_location"], "Chord Road Hospital")
        self.assertFalse(payload["is_critical"])
        self.assertTrue(payload["is_simulating"])
        self.assertEqual(payload["start_time"], _START.isoformat())
        self.assertEqual(payload["estimated_arrival"], (_START + timedelta(minutes=15)).isoformat())

        self.clock.run_until_idle()
        self.assertTrue(self.bridge.is_finished())

        positions: List[BusMessage] = self.bus.poll(TOPIC_POSITION)
        self.assertEqual(len(positions), 52)
        self.assertEqual([m.payload["position_index"] for m in positions], list(range(52)))
        self.assertTrue(all(m.sender == "AMB_01" for m in positions))
        self.assertEqual(positions[-1].payload["status"], "completed")
        self.assertEqual(positions[-1].payload["position"], [12.9850, 77.5600])
        self.assertEqual(positions[-1].payload["progress_percent"], 100.0)

        densities = [m.payload["density"] for m in positions[1:]]
        self.assertEqual(densities[:16], ["light"] * 16)
        self.assertEqual(densities[16:32], ["moderate"] * 16)
        self.assertEqual(densities[32:], ["heavy"] * 19)

        self.assertEqual(self.statuses, ["active", "completed"])
        self.bridge.stop()
        self.assertEqual(self.statuses, ["active", "completed", "idle"])
        self.assertIsNone(self.bridge.journey())

    def test_signals_follow_progress(self) -> None:
        self.bridge.configure("MG Road", "Chord Road Hospital", False)
        route = self.bridge.route
        markers = self.bridge.signal_markers()
        self.assertEqual(
            [m["location"] for m in markers],
            [route[i].as_list() for i in (10, 18, 26, 33, 41)],
        )
        self.assertTrue(all(m["state"] == "RED" for m in markers))

        self.bridge.start()
        self.clock.run_until_idle()
        self.assertTrue(all(s.cleared for s in self.bridge.signal_states()))

    def test_signal_names_follow_pickup(self) -> None:
        summary = self.bridge.configure("Rajajinagar 2nd Block", "Chord Road Hospital", False)
        self.assertEqual(summary["signal_names"][0], "Rajajinagar 2nd Block Signal")
        self.assertEqual(summary["signal_delay_min"], [10.0, 20.0])
        markers = self.bridge.signal_markers()
        self.assertEqual(markers[2]["name"], "Chord Road Junction")
        self.assertEqual(self.bridge.signal_states()[4].name, "Chord Road Hospital")

        summary = self.bridge.configure("Unknown Place", "Chord Road Hospital", False)
        self.assertEqual(summary["signal_names"][0], "Major Junction Signal 1")
        self.assertEqual(summary["signal_delay_min"], [8.0, 16.0])
        names = [m["name"] for m in self.bridge.signal_markers()]
        self.assertEqual(names[3], "Emergency Corridor Signal")
        self.assertEqual(names[4], "Signal 5")

    def test_journey_announced_once_running(self) -> None:
        seen: List[SimulationStatus] = []
        self.bus.subscribe(TOPIC_JOURNEY, lambda m: seen.append(self.bridge.snapshot().status))
        self.bridge.configure("MG Road", "Chord Road Hospital", False)
        self.assertTrue(self.bridge.start())
        self.assertEqual(seen, [SimulationStatus.RUNNING])

        self.bridge.dispose()
        self.assertFalse(self.bridge.start())
        self.assertEqual(len(seen), 1)

    def test_eta_counts_down_whole_minutes(self) -> None:
        self.bridge.configure("MG Road", "Chord Road Hospital", True)
        self.assertIsNone(self.bridge.eta_minutes())
        self.bridge.start()
        self.assertEqual(self.bridge.eta_minutes(_START + timedelta(seconds=59)), 15)
        self.assertEqual(self.bridge.eta_minutes(_START + timedelta(minutes=5, seconds=30)), 10)
        self.assertEqual(self.bridge.eta_minutes(_START + timedelta(minutes=20)), 0)
        self.assertTrue(self.bridge.journey().critical)

    def test_reconfigure_during_run_resets(self) -> None:
        self.bridge.configure("MG Road", "Chord Road Hospital", False)
        self.bridge.start()
        self.clock.advance(10.0)
        self.assertGreater(self.bridge.snapshot().position_index, 0)

        summary = self.bridge.configure("Koramangala", "St. Martha's Hospital", True)
        self.assertTrue(summary["critical"])
        snap = self.bridge.snapshot()
        self.assertIs(snap.status, SimulationStatus.IDLE)
        self.assertEqual(snap.position, Coordinate(12.9352, 77.6245))
        self.assertEqual(self.clock.pending(), 0)
        self.assertIsNone(self.bridge.journey())
        self.assertEqual(self.statuses, ["active", "idle"])

    def test_critical_run_reports_boosted_speed(self) -> None:
        self.bridge.configure("MG Road", "Chord Road Hospital", True)
        self.bridge.start()
        self.clock.advance(1.0)
        snap = self.bridge.snapshot()
        self.assertEqual(snap.position_index, 1)
        self.assertEqual(snap.speed_kmh, 80.0)

    def test_dispose_stops_publishing(self) -> None:
        self.bridge.configure("MG Road", "Chord Road Hospital", False)
        self.bridge.start()
        self.bridge.dispose()
        self.bus.poll(TOPIC_POSITION)
        self.clock.advance(500.0)
        self.assertEqual(self.bus.poll(TOPIC_POSITION), [])
        self.assertFalse(self.bridge.start())


if __name__ == "__main__":
    unittest.main()
