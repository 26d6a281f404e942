from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Optional

from models.records import NoiseReading

NOW_MS = int(datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc).timestamp() * 1000)


class FixedRandom(random.Random):
    """Random source whose ``random()`` always returns the same value."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


def utc_ms(hour: int, day: int = 1) -> int:
    return int(datetime(2024, 6, day, hour, 0, tzinfo=timezone.utc).timestamp() * 1000)


def make_reading(
    reading_id: str,
    decibel: float = 70.0,
    latitude: float = 0.0,
    longitude: float = 0.0,
    timestamp: Optional[int] = None,
    location_name: Optional[str] = None,
) -> NoiseReading:
    return NoiseReading(
        id=reading_id,
        latitude=latitude,
        longitude=longitude,
        decibel=decibel,
        timestamp=NOW_MS if timestamp is None else timestamp,
        device_type="static",
        location_name=location_name,
    )
