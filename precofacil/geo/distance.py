from __future__ import annotations

import math

from .models import Coordinates

EARTH_RADIUS_KM = 6371.0


def calculate_distance(a: Coordinates, b: Coordinates) -> float:
    """Haversine distance between two points in km, rounded to 1 decimal."""
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return round(EARTH_RADIUS_KM * c, 1)
