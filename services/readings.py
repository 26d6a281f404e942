"""Query and submission operations over synthetic noise readings."""

from __future__ import annotations

import logging
import random
import string
from datetime import tzinfo
from functools import lru_cache
from typing import List, Optional

from models.records import FilterCriteria, NoiseReading
from services.generator import generate_city_readings, generate_nearby_readings
from services.geodesy import distance_km
from settings import get_settings

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_LENGTH = 9


def get_readings(
    criteria: FilterCriteria,
    *,
    rng: Optional[random.Random] = None,
    now_ms: Optional[int] = None,
    tz: Optional[tzinfo] = None,
) -> List[NoiseReading]:
    """Regenerate readings and narrow them to ``criteria``.

    The major-city batch is always included; the nearby-area batch only when a
    centre is given. The radius filter applies only together with a centre.
    Results are ordered newest first; an empty or inverted decibel range simply
    yields no readings.
    """
    rng = rng or random.Random()
    readings = generate_city_readings(rng=rng, now_ms=now_ms, tz=tz)

    center = criteria.center
    if center is not None:
        readings.extend(
            generate_nearby_readings(
                center.latitude, center.longitude, rng=rng, now_ms=now_ms, tz=tz
            )
        )
        if criteria.radius_km:
            radius = criteria.radius_km
            readings = [
                reading
                for reading in readings
                if distance_km(
                    center.latitude, center.longitude, reading.latitude, reading.longitude
                )
                <= radius
            ]

    readings = [
        reading
        for reading in readings
        if criteria.min_decibel <= reading.decibel <= criteria.max_decibel
    ]
    # sort is stable, so equal timestamps keep generation order
    readings.sort(key=lambda reading: reading.timestamp, reverse=True)

    logger.debug(
        "Generated filtered readings",
        extra={
            "reading_count": len(readings),
            "latitude": center.latitude if center else None,
            "longitude": center.longitude if center else None,
            "radius_km": criteria.radius_km,
        },
    )
    return readings


def new_reading_id(rng: Optional[random.Random] = None) -> str:
    rng = rng or random.SystemRandom()
    return "".join(rng.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


def submit_reading(
    latitude: float,
    longitude: float,
    decibel: float,
    timestamp: int,
    device_type: str,
    location_name: Optional[str] = None,
    user_id: Optional[str] = None,
    *,
    rng: Optional[random.Random] = None,
) -> NoiseReading:
    """Give a caller-provided sample a fresh id. Nothing is validated or stored."""
    return NoiseReading(
        id=new_reading_id(rng),
        latitude=latitude,
        longitude=longitude,
        decibel=decibel,
        timestamp=timestamp,
        device_type=device_type,
        location_name=location_name,
        user_id=user_id,
    )


@lru_cache
def build_default_rng() -> random.Random:
    """Shared generator for request handlers, seeded from ``NOISE_RANDOM_SEED`` when set."""
    return random.Random(get_settings().random_seed)
