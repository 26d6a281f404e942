"""Great-circle distance and bounding-box helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True, slots=True)
class RegionBounds:
    north: float
    south: float
    east: float
    west: float


INDIA_BOUNDS = RegionBounds(north=35.5087, south=6.7535, east=97.3956, west=68.1766)


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance between two points in kilometres."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) * math.sin(d_lat / 2)
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2)
        * math.sin(d_lon / 2)
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def is_within_region(lat: float, lon: float, bounds: RegionBounds = INDIA_BOUNDS) -> bool:
    return bounds.south <= lat <= bounds.north and bounds.west <= lon <= bounds.east
