"""Synthetic 24-hour noise history for fixed location catalogs."""

from __future__ import annotations

import math
import random
import time
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import List, Optional, Sequence

from models.records import NoiseReading

HOUR_MS = 3_600_000
HISTORY_HOURS = 24
STATIC_DEVICE = "static"


@dataclass(frozen=True, slots=True)
class CatalogLocation:
    """A named place with its nominal (base) noise level.

    For nearby areas ``latitude``/``longitude`` are offsets from the caller's
    centre rather than absolute coordinates.
    """

    name: str
    latitude: float
    longitude: float
    base_decibel: float


MAJOR_CITIES: Sequence[CatalogLocation] = (
    CatalogLocation("Delhi", 28.6139, 77.2090, 85),
    CatalogLocation("Mumbai", 19.0760, 72.8777, 82),
    CatalogLocation("Bangalore", 12.9716, 77.5946, 78),
    CatalogLocation("Chennai", 13.0827, 80.2707, 76),
    CatalogLocation("Kolkata", 22.5726, 88.3639, 80),
    CatalogLocation("Hyderabad", 17.3850, 78.4867, 77),
)

NEARBY_AREAS: Sequence[CatalogLocation] = (
    CatalogLocation("Tambaram", -0.05, 0.02, 72),
    CatalogLocation("Vandalur", -0.08, 0.03, 68),
    CatalogLocation("Perungalathur", -0.06, 0.01, 70),
    CatalogLocation("Chromepet", -0.04, 0.02, 75),
    CatalogLocation("Pallavaram", -0.03, 0.01, 73),
    CatalogLocation("Guduvanchery", -0.09, 0.02, 65),
)


def current_time_ms() -> int:
    return int(time.time() * 1000)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with ties going up (``2.5 -> 3``, ``-2.5 -> -2``)."""
    return int(math.floor(value + 0.5))


def hour_of_day(timestamp_ms: int, tz: Optional[tzinfo] = None) -> int:
    """Clock hour of a millisecond timestamp, in local time unless ``tz`` is given."""
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=tz).hour


def time_adjusted_decibel(base_decibel: float, hour: int, rng: random.Random) -> float:
    """Apply the rush-hour/night-time variation to a base level."""
    if 7 <= hour <= 10:
        return base_decibel + rng.random() * 10
    if 17 <= hour <= 20:
        return base_decibel + rng.random() * 8
    if hour >= 23 or hour <= 5:
        return base_decibel - rng.random() * 15
    return base_decibel + (rng.random() * 5 - 2.5)


def _generate(
    prefix: str,
    catalog: Sequence[CatalogLocation],
    origin_lat: float,
    origin_lng: float,
    rng: random.Random,
    now_ms: int,
    tz: Optional[tzinfo],
) -> List[NoiseReading]:
    readings: List[NoiseReading] = []
    for index, location in enumerate(catalog):
        for hour in range(HISTORY_HOURS):
            timestamp = now_ms - hour * HOUR_MS
            decibel = time_adjusted_decibel(
                location.base_decibel, hour_of_day(timestamp, tz), rng
            )
            readings.append(
                NoiseReading(
                    id=f"{prefix}-{index}-{hour}",
                    latitude=origin_lat + location.latitude,
                    longitude=origin_lng + location.longitude,
                    decibel=round_half_up(decibel),
                    timestamp=timestamp,
                    device_type=STATIC_DEVICE,
                    location_name=location.name,
                )
            )
    return readings


def generate_city_readings(
    rng: Optional[random.Random] = None,
    now_ms: Optional[int] = None,
    tz: Optional[tzinfo] = None,
) -> List[NoiseReading]:
    """Regenerate the major-city batch: one reading per city per past hour."""
    return _generate(
        "city",
        MAJOR_CITIES,
        0.0,
        0.0,
        rng or random.Random(),
        current_time_ms() if now_ms is None else now_ms,
        tz,
    )


def generate_nearby_readings(
    center_lat: float,
    center_lng: float,
    rng: Optional[random.Random] = None,
    now_ms: Optional[int] = None,
    tz: Optional[tzinfo] = None,
) -> List[NoiseReading]:
    """Regenerate the nearby-area batch anchored at the given centre."""
    return _generate(
        "nearby",
        NEARBY_AREAS,
        center_lat,
        center_lng,
        rng or random.Random(),
        current_time_ms() if now_ms is None else now_ms,
        tz,
    )
