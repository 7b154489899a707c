"""
Distance Service

Great-circle distance between coordinates and ordering of places by
proximity to a reference point.
"""

import math
from typing import Iterable, List

from app.schemas.geo import Coordinates
from app.schemas.place import Place

EARTH_RADIUS_KM = 6371.0


def haversine_km(a: Coordinates, b: Coordinates) -> float:
    """
    Compute the great-circle distance in kilometers between two coordinates,
    assuming a spherical earth.
    """
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(b.longitude - a.longitude)

    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    h = min(h, 1.0)
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def sort_places_by_distance(places: Iterable[Place], reference: Coordinates) -> List[Place]:
    """
    Order places by distance to a reference coordinate, nearest first.

    The sort is stable, so places at equal distance keep their input order.

    Args:
        places: Places to order
        reference: Coordinates distances are measured from

    Returns:
        New list holding the same places
    """
    return sorted(places, key=lambda place: haversine_km(reference, place.coordinates))
