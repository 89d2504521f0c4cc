import math

from .config import EARTH_RADIUS_KM, MS_TO_KNOTS
from .position import Position


def haversine(theta: float) -> float:
    return 0.5 * (1.0 - math.cos(theta))


def haversine_km(p1: Position, p2: Position, radius_km: float = EARTH_RADIUS_KM) -> float:
    """
    Great-circle distance in kilometers between two positions.

    The asin argument is clamped to [0, 1] so rounding on identical or
    antipodal points can never turn into NaN.
    """
    phi1 = math.radians(p1.lat)
    phi2 = math.radians(p2.lat)
    d_phi = phi2 - phi1
    d_lambda = math.radians(p2.lon) - math.radians(p1.lon)

    h = haversine(d_phi) + math.cos(phi1) * math.cos(phi2) * haversine(d_lambda)
    h = min(1.0, max(0.0, h))
    return 2.0 * radius_km * math.asin(math.sqrt(h))


def speed_knots(distance_m: float, elapsed_s: float) -> float:
    """
    Speed over ground in knots. Zero elapsed time means zero speed.
    """
    if elapsed_s == 0:
        return 0.0
    return abs(distance_m / elapsed_s) * MS_TO_KNOTS
