"""Great-circle distance between coordinates."""

import math
from typing import Protocol

EARTH_RADIUS_KM = 6371.0

# Returned instead of a real distance when a point was never geocoded, so
# (0, 0) listings sort last and fall outside any realistic radius.
UNGEOCODED_DISTANCE_KM = 999.0


class GeoPoint(Protocol):
    latitude: float
    longitude: float


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate distance between two coordinates using the Haversine formula.

    Returns distance in kilometers.
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlat = lat2_rad - lat1_rad
    dlon = math.radians(lon2) - math.radians(lon1)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2
    )
    # Clamp against float drift past 1.0 for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def is_unset(point: GeoPoint) -> bool:
    """Check if a point carries the (0, 0) "never geocoded" sentinel."""
    return point.latitude == 0 and point.longitude == 0


def distance(origin: GeoPoint, destination: GeoPoint) -> float:
    """Distance in km, or ``UNGEOCODED_DISTANCE_KM`` if either end is unset."""
    if is_unset(origin) or is_unset(destination):
        return UNGEOCODED_DISTANCE_KM
    return haversine_km(
        origin.latitude, origin.longitude, destination.latitude, destination.longitude
    )
