"""Spherical distance helpers for proximity search."""

import math

from geopy.distance import EARTH_RADIUS, great_circle

# Proximity lists are capped by radius instead of being paginated
MAX_DISTANCE_METERS = 30_000
# Meters to kilometers
DISTANCE_MULTIPLIER = 0.001


def is_valid_coordinate(latitude: float | None, longitude: float | None) -> bool:
    """Check that a point is a usable WGS84 position."""
    if latitude is None or longitude is None:
        return False
    if math.isnan(latitude) or math.isnan(longitude):
        return False
    return -90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0


def latitude_band(latitude: float, meters: float) -> tuple[float, float]:
    """Latitudes that can hold points within ``meters`` of ``latitude``."""
    delta = math.degrees(meters / (EARTH_RADIUS * 1000))
    return max(latitude - delta, -90.0), min(latitude + delta, 90.0)


def distance_meters(
    origin: tuple[float, float], destination: tuple[float, float]
) -> float:
    """Great-circle distance between two (latitude, longitude) points."""
    return great_circle(origin, destination).meters
