"""Unit tests for the derived noise metrics."""

from __future__ import annotations

import math
import random
from datetime import datetime, timezone

import pytest

from conftest import FixedRandom, make_reading, utc_ms
from services.analytics import (
    analyze_pattern,
    assess_health_impact,
    predict_next_day,
    risk_level,
    summarize_readings,
)

MIDDAY = datetime(2024, 6, 1, 13, 0)


def _levels(*decibels: float):
    return [make_reading(f"r{index}", decibel=value) for index, value in enumerate(decibels)]


@pytest.mark.parametrize(
    "decibels, pattern, confidence",
    [
        ((70, 70, 70), "Consistent", 85),
        ((60, 64), "Consistent", 85),  # variance 4
        ((60, 66), "Fluctuating", 75),  # variance 9
        ((50, 70), "Erratic", 65),  # variance 100
    ],
)
def test_analyze_pattern_classifies_variance(decibels, pattern: str, confidence: int) -> None:
    analysis = analyze_pattern(_levels(*decibels), now=MIDDAY)

    assert analysis.pattern_type == pattern
    assert analysis.confidence == confidence
    assert "detected" not in analysis.insight


@pytest.mark.parametrize(
    "hour, clause",
    [
        (7, "Morning rush hour patterns detected."),
        (18, "Evening peak activity observed."),
        (23, "Night-time noise levels analyzed."),
        (3, "Night-time noise levels analyzed."),
    ],
)
def test_analyze_pattern_adds_time_of_day_clause(hour: int, clause: str) -> None:
    analysis = analyze_pattern(_levels(70, 70), now=datetime(2024, 6, 1, hour, 30))

    assert analysis.insight.endswith(" " + clause)


def test_analyze_pattern_has_no_clause_at_midday() -> None:
    analysis = analyze_pattern(_levels(70, 70), now=MIDDAY)

    assert analysis.insight == (
        "The noise levels show a stable pattern, suggesting consistent ambient noise."
    )
    assert analysis.timestamp == int(MIDDAY.timestamp() * 1000)


def test_analyze_pattern_handles_empty_input() -> None:
    analysis = analyze_pattern([], now=MIDDAY)

    assert analysis.pattern_type == "Insufficient data"
    assert analysis.confidence == 0


@pytest.mark.parametrize(
    "decibel, level, recommendation_count",
    [(60, "low", 3), (70, "moderate", 4), (84.9, "moderate", 4), (85, "high", 5), (90, "high", 5)],
)
def test_health_impact_tiers(decibel: float, level: str, recommendation_count: int) -> None:
    impact = assess_health_impact(_levels(decibel, decibel))

    assert impact.risk_level == level
    assert len(impact.recommendations) == recommendation_count
    assert impact.average_exposure == pytest.approx(decibel)


def test_health_impact_uses_mean_of_readings() -> None:
    impact = assess_health_impact(_levels(60, 80))

    assert impact.average_exposure == pytest.approx(70.0)
    assert impact.risk_level == "moderate"
    assert impact.summary.startswith("Moderate noise exposure detected.")
    assert impact.recommendations[0] == "Use sound-dampening materials where possible"


def test_health_impact_handles_empty_input() -> None:
    impact = assess_health_impact([])

    assert impact.average_exposure == 0
    assert impact.risk_level == "low"


def test_risk_level_boundary_is_strict() -> None:
    assert risk_level(69.999) == "low"
    assert risk_level(70) == "moderate"


def test_prediction_with_sparse_hours_falls_back_to_overall_mean() -> None:
    readings = [
        make_reading("early", decibel=80, timestamp=utc_ms(3)),
        make_reading("late", decibel=60, timestamp=utc_ms(15)),
    ]

    prediction = predict_next_day(readings, rng=random.Random(21), tz=timezone.utc)

    assert len(prediction) == 24
    assert all(isinstance(value, int) and math.isfinite(value) for value in prediction)
    assert 78 <= prediction[3] <= 82
    assert 58 <= prediction[15] <= 62
    for hour, value in enumerate(prediction):
        if hour not in (3, 15):
            assert 68 <= value <= 72


def test_prediction_without_jitter_returns_hourly_averages() -> None:
    readings = [
        make_reading("a", decibel=70, timestamp=utc_ms(8)),
        make_reading("b", decibel=74, timestamp=utc_ms(8, day=2)),
        make_reading("c", decibel=60, timestamp=utc_ms(22)),
    ]

    prediction = predict_next_day(readings, rng=FixedRandom(0.5), tz=timezone.utc)

    assert prediction[8] == 72
    assert prediction[22] == 60
    assert prediction[0] == 68  # overall mean 68


def test_prediction_handles_empty_input() -> None:
    assert predict_next_day([]) == [0] * 24


def test_summarize_readings() -> None:
    stats = summarize_readings(_levels(60, 75, 90))

    assert stats.count == 3
    assert stats.average == 75
    assert stats.minimum == 60
    assert stats.maximum == 90


def test_summarize_readings_rounds_average_half_up() -> None:
    assert summarize_readings(_levels(60, 61)).average == 61


def test_summarize_readings_empty() -> None:
    stats = summarize_readings([])

    assert (stats.count, stats.average, stats.minimum, stats.maximum) == (0, 0, 0, 0)
