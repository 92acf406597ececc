from math import atan2, cos, pi, sin, sqrt

EARTH_RADIUS_KM = 6371.0

LatLng = tuple[float, float]


def to_radians(degrees: float) -> float:
    return degrees * (pi / 180)


def distance_km(a: LatLng, b: LatLng) -> float:
    """Great-circle (Haversine) distance in kilometres between two (lat, lng) points."""
    lat1, lng1 = a
    lat2, lng2 = b
    dlat = to_radians(lat2 - lat1)
    dlng = to_radians(lng2 - lng1)
    h = sin(dlat / 2) ** 2 + cos(to_radians(lat1)) * cos(to_radians(lat2)) * sin(dlng / 2) ** 2
    return EARTH_RADIUS_KM * 2 * atan2(sqrt(h), sqrt(1 - h))
