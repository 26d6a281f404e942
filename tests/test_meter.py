"""Unit tests for the simulated noise meter."""

from __future__ import annotations

import math
import random

import pytest

from conftest import NOW_MS, FixedRandom
from models.records import UserLocation
from services.meter import MeterSession, describe_level, simulate_sample


def test_simulate_sample_combines_base_noise_and_wave() -> None:
    assert simulate_sample(FixedRandom(0.5), now_s=0.0) == 60
    assert simulate_sample(FixedRandom(0.0), now_s=math.pi / 2) == 55


def test_simulate_sample_stays_in_range() -> None:
    rng = random.Random(3)

    samples = [simulate_sample(rng, now_s=float(second)) for second in range(200)]

    assert all(45 <= sample <= 75 for sample in samples)


@pytest.mark.parametrize(
    "decibel, label",
    [
        (None, "Not recording"),
        (50, "Quiet"),
        (65, "Moderate"),
        (75, "Loud"),
        (85, "Very Loud"),
        (95, "Extremely Loud"),
    ],
)
def test_describe_level(decibel, label: str) -> None:
    assert describe_level(decibel) == label


def test_session_tracks_running_statistics() -> None:
    session = MeterSession()

    for sample in (60, 72, 65):
        session.record(sample)

    assert session.current == 65
    assert session.maximum == 72
    assert session.average == 66  # 65.67 rounded
    assert session.elapsed_seconds == 3
    assert session.level == "Moderate"


def test_session_reset_clears_samples() -> None:
    session = MeterSession()
    session.record(80)

    session.reset()

    assert session.average is None
    assert session.maximum is None
    assert session.elapsed_seconds == 0
    assert session.level == "Not recording"


def test_submission_requires_samples() -> None:
    session = MeterSession(location=UserLocation(12.9, 80.1))

    with pytest.raises(ValueError, match="No samples"):
        session.to_submission()


def test_submission_requires_location() -> None:
    session = MeterSession()
    session.record(70)

    with pytest.raises(ValueError, match="Location not detected"):
        session.to_submission()


def test_submission_uses_session_average() -> None:
    session = MeterSession(location=UserLocation(12.9, 80.1, accuracy=20.0))
    session.record(60)
    session.record(70)

    reading = session.to_submission(timestamp_ms=NOW_MS)

    assert reading.decibel == 65
    assert reading.latitude == 12.9
    assert reading.longitude == 80.1
    assert reading.device_type == "mobile"
    assert reading.timestamp == NOW_MS
    assert len(reading.id) == 9
