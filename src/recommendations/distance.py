"""Great-circle distance between two points on the Earth's surface."""

import math

EARTH_RADIUS_KM = 6371


def haversine_km(lat1, lon1, lat2, lon2) -> float | None:
    """Distance in kilometres, or None when any coordinate is missing."""
    if lat1 is None or lon1 is None or lat2 is None or lon2 is None:
        return None

    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = math.sin(d_lat / 2) ** 2 + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_to(eatery, location) -> float | None:
    """Distance from ``location`` (a ``(lat, lon)`` pair or None) to an eatery."""
    if location is None:
        return None
    lat, lon = location
    return haversine_km(lat, lon, eatery.latitude, eatery.longitude)
