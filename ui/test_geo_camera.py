#!/usr/bin/env python3
"""
Tests for the map camera and the interpolation helpers (no display needed).
"""

import unittest

from ui.helpers import lerp_point
from ui.types import GeoCamera


class GeoCameraTests(unittest.TestCase):
    def test_center_maps_to_screen_middle(self):
        cam = GeoCamera(1000, 700, center_lat=12.97, center_lon=77.59)
        self.assertEqual(cam.world_to_screen(12.97, 77.59), (500.0, 350.0))

    def test_north_is_up_and_east_is_right(self):
        cam = GeoCamera(1000, 700)
        _, y_north = cam.world_to_screen(cam.center_lat + 0.01, cam.center_lon)
        x_east, _ = cam.world_to_screen(cam.center_lat, cam.center_lon + 0.01)
        self.assertLess(y_north, 350)
        self.assertGreater(x_east, 500)

    def test_round_trip(self):
        cam = GeoCamera(1000, 700)
        sx, sy = cam.world_to_screen(12.9850, 77.5600)
        lat, lon = cam.screen_to_world(sx, sy)
        self.assertAlmostEqual(lat, 12.9850, places=9)
        self.assertAlmostEqual(lon, 77.5600, places=9)

    def test_fit_keeps_points_inside_margin(self):
        cam = GeoCamera(1000, 700)
        points = [(12.9716, 77.6197), (12.9850, 77.5600), (13.0000, 77.5900)]
        cam.fit(points, margin_px=90)
        for lat, lon in points:
            sx, sy = cam.world_to_screen(lat, lon)
            self.assertGreaterEqual(sx, 90 - 1e-6)
            self.assertLessEqual(sx, 910 + 1e-6)
            self.assertGreaterEqual(sy, 90 - 1e-6)
            self.assertLessEqual(sy, 610 + 1e-6)

    def test_fit_single_point_does_not_divide_by_zero(self):
        cam = GeoCamera(800, 600)
        cam.fit([(12.9716, 77.5946)])
        self.assertEqual(cam.world_to_screen(12.9716, 77.5946), (400.0, 300.0))

    def test_fit_empty_is_noop(self):
        cam = GeoCamera(800, 600)
        before = (cam.center_lat, cam.center_lon, cam.px_per_deg)
        cam.fit([])
        self.assertEqual((cam.center_lat, cam.center_lon, cam.px_per_deg), before)


class LerpTests(unittest.TestCase):
    def test_clamped(self):
        self.assertEqual(lerp_point((0, 0), (10, 20), 0.5), (5.0, 10.0))
        self.assertEqual(lerp_point((0, 0), (10, 20), 2.0), (10.0, 20.0))
        self.assertEqual(lerp_point((0, 0), (10, 20), -1.0), (0.0, 0.0))


if __name__ == "__main__":
    unittest.main()
