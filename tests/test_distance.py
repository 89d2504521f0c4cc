import unittest
import math
from vesselstops.core.position import Position
from vesselstops.core.distance import haversine_km, speed_knots

class TestHaversine(unittest.TestCase):
    def test_known_distance(self):
        # Nashville (BNA) to Los Angeles (LAX) on a 6372.8 km sphere
        bna = Position(lat=36.12, lon=-86.67)
        lax = Position(lat=33.94, lon=-118.40)
        self.assertAlmostEqual(haversine_km(bna, lax), 2887.2599506, places=3)

    def test_identical_points(self):
        p = Position(lat=59.91, lon=10.75)
        self.assertEqual(haversine_km(p, p), 0.0)

    def test_symmetry(self):
        a = Position(lat=-7.578, lon=171.328)
        b = Position(lat=12.5, lon=-45.25)
        self.assertAlmostEqual(haversine_km(a, b), haversine_km(b, a), places=9)

    def test_non_negative(self):
        points = [Position(lat=float(lat), lon=float(lon)) for lat in (-80, -10, 0, 45) for lon in (-170, 0, 33, 179)]
        for a in points:
            for b in points:
                self.assertGreaterEqual(haversine_km(a, b), 0.0)

    def test_antipodal_points_are_finite(self):
        # Half the circumference: pi * R
        a = Position(lat=0.0, lon=0.0)
        b = Position(lat=0.0, lon=180.0)
        d = haversine_km(a, b)
        self.assertFalse(math.isnan(d))
        self.assertAlmostEqual(d, math.pi * 6372.8, places=6)

    def test_one_degree_along_equator(self):
        a = Position(lat=0.0, lon=0.0)
        b = Position(lat=0.0, lon=1.0)
        self.assertAlmostEqual(haversine_km(a, b), 2 * math.pi * 6372.8 / 360.0, places=6)

    def test_custom_radius(self):
        a = Position(lat=0.0, lon=0.0)
        b = Position(lat=0.0, lon=1.0)
        self.assertAlmostEqual(haversine_km(a, b, radius_km=1.0), math.radians(1.0), places=9)

class TestSpeed(unittest.TestCase):
    def test_zero_elapsed_time(self):
        self.assertEqual(speed_knots(1500.0, 0), 0.0)

    def test_one_meter_per_second(self):
        self.assertAlmostEqual(speed_knots(100.0, 100), 1.9438)

    def test_speed_is_absolute(self):
        self.assertAlmostEqual(speed_knots(100.0, -100), 1.9438)

if __name__ == '__main__':
    unittest.main()
