"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TimeRange(str, Enum):
    """Time windows accepted by the readings query."""

    day = "day"
    week = "week"
    month = "month"
    year = "year"
    all = "all"


class _FromDomain(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class Reading(_FromDomain):
    """A noise sample as exposed over the API."""

    id: str
    latitude: float
    longitude: float
    decibel: float
    timestamp: int = Field(..., description="Capture time in milliseconds since epoch.")
    device_type: str
    location_name: Optional[str] = None
    user_id: Optional[str] = None


class ReadingSubmission(BaseModel):
    """Payload for submitting a measured reading."""

    latitude: float
    longitude: float
    decibel: float
    timestamp: int
    device_type: str
    location_name: Optional[str] = None
    user_id: Optional[str] = None


class Hotspot(_FromDomain):
    id: str
    latitude: float
    longitude: float
    average_decibel: float
    reading_count: int = Field(..., ge=1)
    radius: float
    location_name: Optional[str] = None
    severity: str
    color: str


class Location(_FromDomain):
    latitude: float
    longitude: float
    accuracy: float = 0.0


class NoiseAnalysis(_FromDomain):
    pattern_type: str
    insight: str
    confidence: int
    timestamp: int


class HealthImpact(_FromDomain):
    summary: str
    recommendations: List[str]
    average_exposure: float
    risk_level: str
    timestamp: int


class ReadingStatistics(_FromDomain):
    count: int = Field(..., ge=0)
    average: int
    minimum: float
    maximum: float


class AnalyticsReport(BaseModel):
    """Derived metrics for one filtered reading set."""

    statistics: ReadingStatistics
    analysis: NoiseAnalysis
    health: HealthImpact
    prediction: List[int] = Field(..., min_length=24, max_length=24)


class Dashboard(_FromDomain):
    location: Optional[Location] = None
    location_name: Optional[str] = None
    local_readings: List[Reading]
    nearby_readings: List[Reading]
    analysis: NoiseAnalysis
    health: HealthImpact
    prediction: List[int]
    statistics: ReadingStatistics
    refreshed_at_ms: int
    last_nearby_update_ms: Optional[int] = None
    next_nearby_update_ms: Optional[int] = None


class RegionCheck(BaseModel):
    latitude: float
    longitude: float
    within_region: bool


class Organization(_FromDomain):
    id: int
    name: str
    description: str
    address: str
    phone: str
    email: str
    website: str
    type: str


class ContactDirectory(BaseModel):
    """Complaint contacts for the caller's region."""

    location_name: str
    state: str
    organizations: List[Organization]
    checklist: List[str]
