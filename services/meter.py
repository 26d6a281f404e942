"""Simulated microphone noise meter."""

from __future__ import annotations

import math
import random
import time
from dataclasses import dataclass, field
from typing import List, Optional

from models.records import NoiseReading, UserLocation
from services.generator import current_time_ms, round_half_up
from services.readings import submit_reading

AMBIENT_BASE_DB = 60.0
MOBILE_DEVICE = "mobile"


def simulate_sample(
    rng: Optional[random.Random] = None, now_s: Optional[float] = None
) -> int:
    """One fake microphone sample: ambient base, +/-10 dB noise and a slow sine wave."""
    rng = rng or random.Random()
    moment = time.time() if now_s is None else now_s
    variance = rng.random() * 20 - 10
    wave = math.sin(moment) * 5
    return round_half_up(AMBIENT_BASE_DB + variance + wave)


def describe_level(decibel: Optional[float]) -> str:
    if decibel is None:
        return "Not recording"
    if decibel < 65:
        return "Quiet"
    if decibel < 75:
        return "Moderate"
    if decibel < 85:
        return "Loud"
    if decibel < 95:
        return "Very Loud"
    return "Extremely Loud"


@dataclass
class MeterSession:
    """Running statistics for one recording, one sample per second."""

    samples: List[int] = field(default_factory=list)
    current: Optional[int] = None
    maximum: Optional[int] = None
    location: Optional[UserLocation] = None

    @property
    def elapsed_seconds(self) -> int:
        return len(self.samples)

    @property
    def average(self) -> Optional[int]:
        if not self.samples:
            return None
        return round_half_up(sum(self.samples) / len(self.samples))

    @property
    def level(self) -> str:
        return describe_level(self.current)

    def record(self, sample: int) -> None:
        self.samples.append(sample)
        self.current = sample
        if self.maximum is None or sample > self.maximum:
            self.maximum = sample

    def reset(self) -> None:
        self.samples.clear()
        self.current = None
        self.maximum = None

    def to_submission(self, timestamp_ms: Optional[int] = None) -> NoiseReading:
        average = self.average
        if average is None:
            raise ValueError("No samples recorded yet.")
        if self.location is None:
            raise ValueError("Location not detected; cannot submit reading.")
        return submit_reading(
            latitude=self.location.latitude,
            longitude=self.location.longitude,
            decibel=average,
            timestamp=current_time_ms() if timestamp_ms is None else timestamp_ms,
            device_type=MOBILE_DEVICE,
        )
