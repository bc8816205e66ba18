#!/usr/bin/env python3
"""
Tests for place resolution, great-circle distance and curved route generation.
"""

from __future__ import annotations

import math
import unittest

from sim.gazetteer import CITY_CENTER, GAZETTEER, place_names, resolve
from sim.geo import Coordinate, distance_km, planar_bearing
from sim.route import Route, control_point, generate_route

_MG_ROAD = Coordinate(12.9716, 77.6197)
_CHORD_ROAD = Coordinate(12.9850, 77.5600)


class ResolverTests(unittest.TestCase):
    def test_known_names_case_insensitive(self) -> None:
        self.assertEqual(resolve("MG Road"), _MG_ROAD)
        self.assertEqual(resolve("CHORD ROAD HOSPITAL"), _CHORD_ROAD)
        self.assertEqual(resolve("Pickup at Koramangala 5th block"), Coordinate(12.9352, 77.6245))

    def test_unknown_and_empty_fall_back_to_city_center(self) -> None:
        self.assertEqual(resolve("Unknown Place Name"), CITY_CENTER)
        self.assertEqual(resolve(""), CITY_CENTER)
        self.assertEqual(resolve(None), CITY_CENTER)

    def test_first_match_in_table_order_wins(self) -> None:
        # "mg road" precedes "manipal hospital" in the table, whatever the text order.
        self.assertEqual(resolve("Manipal Hospital, MG Road"), _MG_ROAD)
        self.assertEqual(resolve("MG Road near Manipal Hospital"), _MG_ROAD)

    def test_custom_gazetteer_and_default(self) -> None:
        table = (("depot", Coordinate(1.0, 2.0)),)
        fallback = Coordinate(0.0, 0.0)
        self.assertEqual(resolve("Main Depot", table, fallback), Coordinate(1.0, 2.0))
        self.assertEqual(resolve("MG Road", table, fallback), fallback)

    def test_place_names_keep_order(self) -> None:
        names = place_names()
        self.assertEqual(len(names), len(GAZETTEER))
        self.assertEqual(names[0], "vv puram")
        self.assertEqual(names[-1], "narayana health city")


class DistanceTests(unittest.TestCase):
    def test_zero_for_same_point(self) -> None:
        self.assertEqual(distance_km(_MG_ROAD, _MG_ROAD), 0.0)

    def test_one_degree_on_equator(self) -> None:
        d = distance_km(Coordinate(0.0, 0.0), Coordinate(0.0, 1.0))
        self.assertAlmostEqual(d, 6371.0 * math.pi / 180.0, places=6)

    def test_symmetric(self) -> None:
        self.assertAlmostEqual(
            distance_km(_MG_ROAD, _CHORD_ROAD), distance_km(_CHORD_ROAD, _MG_ROAD), places=9
        )
        self.assertGreater(distance_km(_MG_ROAD, _CHORD_ROAD), 6.0)
        self.assertLess(distance_km(_MG_ROAD, _CHORD_ROAD), 7.0)


class RouteGenerationTests(unittest.TestCase):
    def test_length_and_endpoints(self) -> None:
        route = generate_route(_MG_ROAD, _CHORD_ROAD)
        self.assertEqual(len(route), 52)
        self.assertEqual(route[0], _MG_ROAD)
        self.assertEqual(route[51], _CHORD_ROAD)
        self.assertEqual(route.origin, _MG_ROAD)
        self.assertEqual(route.destination, _CHORD_ROAD)
        self.assertEqual(route.last_index, 51)

    def test_deterministic(self) -> None:
        self.assertEqual(generate_route(_MG_ROAD, _CHORD_ROAD), generate_route(_MG_ROAD, _CHORD_ROAD))

    def test_control_point_is_perpendicular_offset_of_midpoint(self) -> None:
        ctrl = control_point(Coordinate(0.0, 0.0), Coordinate(0.0, 1.0))
        # Eastward segment: bearing 0, so the offset is +0.1 in latitude.
        self.assertAlmostEqual(ctrl.lat, 0.1)
        self.assertAlmostEqual(ctrl.lon, 0.5)
        self.assertAlmostEqual(planar_bearing(Coordinate(0.0, 0.0), Coordinate(1.0, 0.0)), math.pi / 2)

    def test_interior_samples_follow_quadratic_bezier(self) -> None:
        origin, dest = Coordinate(0.0, 0.0), Coordinate(0.0, 1.0)
        route = generate_route(origin, dest)
        t = 1 / 51
        expected_lat = 2 * (1 - t) * t * 0.1
        expected_lon = 2 * (1 - t) * t * 0.5 + t * t
        self.assertAlmostEqual(route[1].lat, expected_lat)
        self.assertAlmostEqual(route[1].lon, expected_lon)
        lons = [c.lon for c in route]
        self.assertEqual(lons, sorted(lons))

    def test_coincident_endpoints_give_flat_route(self) -> None:
        route = generate_route(_MG_ROAD, _MG_ROAD)
        self.assertEqual(len(route), 52)
        self.assertEqual(control_point(_MG_ROAD, _MG_ROAD), _MG_ROAD)
        for c in route:
            self.assertFalse(math.isnan(c.lat) or math.isnan(c.lon))
            self.assertAlmostEqual(c.lat, _MG_ROAD.lat)
            self.assertAlmostEqual(c.lon, _MG_ROAD.lon)

    def test_empty_route_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Route([])

    def test_at_fraction_clamps(self) -> None:
        route = generate_route(_MG_ROAD, _CHORD_ROAD)
        self.assertEqual(route.at_fraction(0.2), route[10])
        self.assertEqual(route.at_fraction(1.5), route[51])
        self.assertEqual(route.at_fraction(-1.0), route[0])


if __name__ == "__main__":
    unittest.main()
