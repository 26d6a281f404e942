"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Optional

TimeRange = Literal["day", "week", "month", "year", "all"]
RiskLevel = Literal["low", "moderate", "high"]


@dataclass(slots=True)
class NoiseReading:
    """A single noise sample at a place and time."""

    id: str
    latitude: float
    longitude: float
    decibel: float
    timestamp: int
    device_type: str
    location_name: Optional[str] = None
    user_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Hotspot:
    """Spatial aggregate of nearby readings."""

    id: str
    latitude: float
    longitude: float
    average_decibel: float
    reading_count: int
    radius: float
    location_name: Optional[str] = None


@dataclass(frozen=True, slots=True)
class UserLocation:
    latitude: float
    longitude: float
    accuracy: float = 0.0


@dataclass(frozen=True, slots=True)
class FilterCriteria:
    """Query input for :func:`services.readings.get_readings`."""

    time_range: TimeRange = "day"
    min_decibel: float = 0.0
    max_decibel: float = 150.0
    center: Optional[UserLocation] = None
    radius_km: Optional[float] = None


@dataclass(slots=True)
class NoiseAnalysis:
    pattern_type: str
    insight: str
    confidence: int
    timestamp: int


@dataclass(slots=True)
class HealthImpact:
    summary: str
    recommendations: List[str]
    average_exposure: float
    risk_level: RiskLevel
    timestamp: int


@dataclass(slots=True)
class ReadingStatistics:
    count: int = 0
    average: int = 0
    minimum: float = 0.0
    maximum: float = 0.0


@dataclass(frozen=True, slots=True)
class Organization:
    """A body that accepts noise-pollution complaints."""

    id: int
    name: str
    description: str
    address: str
    phone: str
    email: str
    website: str
    type: str


@dataclass(slots=True)
class DashboardSnapshot:
    """One fully formed dashboard refresh result."""

    location: Optional[UserLocation]
    local_readings: List[NoiseReading]
    nearby_readings: List[NoiseReading]
    analysis: NoiseAnalysis
    health: HealthImpact
    prediction: List[int]
    statistics: ReadingStatistics
    refreshed_at_ms: int
    last_nearby_update_ms: Optional[int] = None
    next_nearby_update_ms: Optional[int] = None
    location_name: Optional[str] = None
    nearby_location: Optional[UserLocation] = None
