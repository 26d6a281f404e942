"""Pattern, health-impact and prediction metrics over a set of readings."""

from __future__ import annotations

import random
from datetime import datetime, tzinfo
from typing import Iterable, List, Optional, Sequence, Tuple

from models.records import HealthImpact, NoiseAnalysis, NoiseReading, ReadingStatistics
from services.generator import HISTORY_HOURS, hour_of_day, round_half_up

_PREDICTION_SPREAD_DB = 5.0

_HEALTH_TIERS = {
    "low": (
        "Current noise levels are within safe limits for long-term exposure.",
        (
            "Continue monitoring noise levels",
            "Maintain current noise control measures",
            "Consider periodic hearing checkups",
        ),
    ),
    "moderate": (
        "Moderate noise exposure detected. Some precautions recommended.",
        (
            "Use sound-dampening materials where possible",
            "Take regular breaks from noisy areas",
            "Consider using noise-canceling headphones",
            "Schedule quiet periods during the day",
        ),
    ),
    "high": (
        "High noise levels detected. Immediate action recommended.",
        (
            "Use hearing protection when in the area",
            "Limit exposure time to noisy periods",
            "Identify and address major noise sources",
            "Consult with health professionals if experiencing symptoms",
            "Consider soundproofing options",
        ),
    ),
}


def _now(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now()


def _timestamp_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def _mean_and_variance(values: Sequence[float]) -> Tuple[float, float]:
    if not values:
        return 0.0, 0.0
    mean = sum(values) / len(values)
    variance = sum((value - mean) ** 2 for value in values) / len(values)
    return mean, variance


def _time_of_day_clause(hour: int) -> str:
    if 6 <= hour <= 9:
        return " Morning rush hour patterns detected."
    if 17 <= hour <= 19:
        return " Evening peak activity observed."
    if hour >= 22 or hour <= 5:
        return " Night-time noise levels analyzed."
    return ""


def analyze_pattern(
    readings: Sequence[NoiseReading], *, now: Optional[datetime] = None
) -> NoiseAnalysis:
    """Classify how much the decibel levels vary.

    An empty set is reported as ``"Insufficient data"`` with zero confidence.
    """
    moment = _now(now)
    if not readings:
        return NoiseAnalysis(
            pattern_type="Insufficient data",
            insight="No readings available for analysis.",
            confidence=0,
            timestamp=_timestamp_ms(moment),
        )

    _, variance = _mean_and_variance([reading.decibel for reading in readings])
    if variance < 5:
        pattern_type = "Consistent"
        insight = (
            "The noise levels show a stable pattern, suggesting consistent ambient noise."
        )
        confidence = 85
    elif variance < 15:
        pattern_type = "Fluctuating"
        insight = (
            "Moderate variations in noise levels indicate typical urban activity patterns."
        )
        confidence = 75
    else:
        pattern_type = "Erratic"
        insight = (
            "High variations in noise levels suggest irregular noise sources "
            "requiring attention."
        )
        confidence = 65

    return NoiseAnalysis(
        pattern_type=pattern_type,
        insight=insight + _time_of_day_clause(moment.hour),
        confidence=confidence,
        timestamp=_timestamp_ms(moment),
    )


def risk_level(average_decibel: float) -> str:
    if average_decibel < 70:
        return "low"
    if average_decibel < 85:
        return "moderate"
    return "high"


def assess_health_impact(
    readings: Sequence[NoiseReading], *, now: Optional[datetime] = None
) -> HealthImpact:
    average, _ = _mean_and_variance([reading.decibel for reading in readings])
    level = risk_level(average)
    summary, recommendations = _HEALTH_TIERS[level]
    return HealthImpact(
        summary=summary,
        recommendations=list(recommendations),
        average_exposure=average,
        risk_level=level,  # type: ignore[arg-type]
        timestamp=_timestamp_ms(_now(now)),
    )


def predict_next_day(
    readings: Sequence[NoiseReading],
    *,
    rng: Optional[random.Random] = None,
    tz: Optional[tzinfo] = None,
) -> List[int]:
    """Naive next-day forecast: per-hour average plus a little jitter.

    Hours with no samples fall back to the overall mean. An empty set yields
    24 zeros.
    """
    if not readings:
        return [0] * HISTORY_HOURS

    rng = rng or random.Random()
    totals = [0.0] * HISTORY_HOURS
    counts = [0] * HISTORY_HOURS
    for reading in readings:
        hour = hour_of_day(reading.timestamp, tz)
        totals[hour] += reading.decibel
        counts[hour] += 1

    overall = sum(totals) / len(readings)
    predictions: List[int] = []
    for total, count in zip(totals, counts):
        average = total / count if count else overall
        jitter = (rng.random() - 0.5) * _PREDICTION_SPREAD_DB
        predictions.append(round_half_up(average + jitter))
    return predictions


def summarize_readings(readings: Iterable[NoiseReading]) -> ReadingStatistics:
    """Count, rounded average, minimum and maximum decibel; zeros when empty."""
    stats = ReadingStatistics()
    total = 0.0
    minimum: Optional[float] = None
    maximum: Optional[float] = None

    for reading in readings:
        stats.count += 1
        value = reading.decibel
        total += value
        if minimum is None or value < minimum:
            minimum = value
        if maximum is None or value > maximum:
            maximum = value

    if stats.count:
        stats.average = round_half_up(total / stats.count)
        stats.minimum = minimum  # type: ignore[assignment]
        stats.maximum = maximum  # type: ignore[assignment]
    return stats
