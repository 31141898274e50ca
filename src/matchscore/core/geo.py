from __future__ import annotations

from math import asin, cos, radians, sin, sqrt

from matchscore.domain.models import GeoPoint

"""
Geospatial helpers.

A tiny geometry layer so feature modules can compute distances between profiles
without pulling in heavier GIS dependencies.
"""

EARTH_RADIUS_KM = 6371.0


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """Compute great-circle distance in kilometers between two points."""
    lat1 = radians(a.lat)
    lon1 = radians(a.lon)
    lat2 = radians(b.lat)
    lon2 = radians(b.lon)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push h a hair above 1.0 for antipodal points.
    return 2 * EARTH_RADIUS_KM * asin(sqrt(min(1.0, h)))
