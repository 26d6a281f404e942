"""HTTP route definitions for the service."""

from __future__ import annotations

import logging
import random
from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.schemas import (
    AnalyticsReport,
    ContactDirectory,
    Dashboard,
    HealthImpact,
    Hotspot,
    NoiseAnalysis,
    Organization,
    Reading,
    ReadingStatistics,
    ReadingSubmission,
    RegionCheck,
    TimeRange,
)
from datastore.reading_store import SubmittedReadingStore, build_default_store
from models.records import FilterCriteria, UserLocation
from services.analytics import (
    analyze_pattern,
    assess_health_impact,
    predict_next_day,
    summarize_readings,
)
from services.contacts import REPORTING_CHECKLIST, organizations_for_state, resolve_state
from services.geocoding import ReverseGeocoder, build_default_geocoder
from services.geodesy import is_within_region
from services.hotspots import build_hotspots, merge_unique, severity_color, severity_level
from services.readings import build_default_rng, get_readings, submit_reading
from services.refresh import DashboardRefresher, build_default_refresher
from settings import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


def get_rng() -> random.Random:
    return build_default_rng()


def get_store() -> SubmittedReadingStore:
    return build_default_store()


def get_geocoder() -> ReverseGeocoder:
    return build_default_geocoder()


def get_refresher() -> DashboardRefresher:
    return build_default_refresher()


def _center(
    latitude: Optional[float], longitude: Optional[float], accuracy: float
) -> Optional[UserLocation]:
    if latitude is None and longitude is None:
        return None
    if latitude is None or longitude is None:
        raise ValueError("latitude and longitude must be provided together.")
    return UserLocation(latitude=latitude, longitude=longitude, accuracy=accuracy)


def _resolve_center(
    latitude: Optional[float], longitude: Optional[float], accuracy: float
) -> Optional[UserLocation]:
    try:
        return _center(latitude, longitude, accuracy)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc


@router.get(
    "/readings",
    response_model=List[Reading],
    summary="Generate and filter noise readings, newest first.",
)
async def list_readings(
    min_decibel: float = Query(0.0, description="Inclusive lower decibel bound."),
    max_decibel: float = Query(150.0, description="Inclusive upper decibel bound."),
    latitude: Optional[float] = Query(None, description="Centre latitude."),
    longitude: Optional[float] = Query(None, description="Centre longitude."),
    accuracy: float = Query(0.0, ge=0, description="Centre accuracy in metres."),
    radius_km: Optional[float] = Query(None, gt=0, description="Radius around the centre."),
    time_range: TimeRange = Query(TimeRange.day),
    rng: random.Random = Depends(get_rng),
) -> List[Reading]:
    center = _resolve_center(latitude, longitude, accuracy)
    criteria = FilterCriteria(
        time_range=time_range.value,
        min_decibel=min_decibel,
        max_decibel=max_decibel,
        center=center,
        radius_km=radius_km,
    )
    readings = get_readings(criteria, rng=rng)
    return [Reading.model_validate(reading) for reading in readings]


@router.post(
    "/readings",
    status_code=status.HTTP_201_CREATED,
    response_model=Reading,
    summary="Submit a measured reading.",
)
async def create_reading(
    payload: ReadingSubmission,
    store: SubmittedReadingStore = Depends(get_store),
) -> Reading:
    reading = submit_reading(**payload.model_dump())
    store.put(reading)
    logger.info(
        "Reading submitted",
        extra={"latitude": reading.latitude, "longitude": reading.longitude},
    )
    return Reading.model_validate(reading)


@router.get(
    "/readings/submitted",
    response_model=List[Reading],
    summary="Readings submitted during this process lifetime, newest first.",
)
async def list_submitted_readings(
    store: SubmittedReadingStore = Depends(get_store),
) -> List[Reading]:
    return [Reading.model_validate(reading) for reading in store.list_recent()]


@router.get(
    "/readings/submitted/{reading_id}",
    response_model=Reading,
    summary="Fetch one submitted reading.",
)
async def get_submitted_reading(
    reading_id: str,
    store: SubmittedReadingStore = Depends(get_store),
) -> Reading:
    reading = store.get(reading_id)
    if reading is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Reading {reading_id!r} not found.",
        )
    return Reading.model_validate(reading)


@router.get(
    "/hotspots",
    response_model=List[Hotspot],
    summary="Cluster city readings, plus local readings when a centre is given.",
)
async def list_hotspots(
    latitude: Optional[float] = Query(None),
    longitude: Optional[float] = Query(None),
    accuracy: float = Query(0.0, ge=0),
    radius_km: Optional[float] = Query(None, gt=0),
    rng: random.Random = Depends(get_rng),
) -> List[Hotspot]:
    center = _resolve_center(latitude, longitude, accuracy)
    readings = get_readings(FilterCriteria(), rng=rng)
    if center is not None:
        local = get_readings(
            FilterCriteria(
                center=center,
                radius_km=radius_km or get_settings().local_radius_km,
            ),
            rng=rng,
        )
        readings = merge_unique(readings, local)

    hotspots = build_hotspots(readings)
    logger.debug(
        "Built hotspots",
        extra={"reading_count": len(readings), "hotspot_count": len(hotspots)},
    )
    return [
        Hotspot(
            **asdict(hotspot),
            severity=severity_level(hotspot.average_decibel),
            color=severity_color(severity_level(hotspot.average_decibel)),
        )
        for hotspot in hotspots
    ]


@router.get(
    "/analytics",
    response_model=AnalyticsReport,
    summary="Pattern, health impact and next-day prediction for an area.",
)
async def get_analytics(
    latitude: Optional[float] = Query(None),
    longitude: Optional[float] = Query(None),
    accuracy: float = Query(0.0, ge=0),
    radius_km: Optional[float] = Query(None, gt=0),
    min_decibel: float = Query(0.0),
    max_decibel: float = Query(150.0),
    rng: random.Random = Depends(get_rng),
) -> AnalyticsReport:
    center = _resolve_center(latitude, longitude, accuracy)
    criteria = FilterCriteria(
        min_decibel=min_decibel,
        max_decibel=max_decibel,
        center=center,
        radius_km=(radius_km or get_settings().local_radius_km) if center else None,
    )
    readings = get_readings(criteria, rng=rng)
    return AnalyticsReport(
        statistics=ReadingStatistics.model_validate(summarize_readings(readings)),
        analysis=NoiseAnalysis.model_validate(analyze_pattern(readings)),
        health=HealthImpact.model_validate(assess_health_impact(readings)),
        prediction=predict_next_day(readings, rng=rng),
    )


@router.get(
    "/dashboard",
    response_model=Dashboard,
    summary="Latest periodically refreshed dashboard snapshot.",
)
async def get_dashboard(
    refresher: DashboardRefresher = Depends(get_refresher),
) -> Dashboard:
    snapshot = refresher.latest
    if snapshot is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="No dashboard data yet.",
        )
    return Dashboard.model_validate(snapshot)


@router.get(
    "/region",
    response_model=RegionCheck,
    summary="Whether a point lies inside the supported region.",
)
async def check_region(
    latitude: float = Query(...),
    longitude: float = Query(...),
) -> RegionCheck:
    return RegionCheck(
        latitude=latitude,
        longitude=longitude,
        within_region=is_within_region(latitude, longitude),
    )


@router.get(
    "/contacts",
    response_model=ContactDirectory,
    summary="Pollution-complaint contacts for the caller's state.",
)
def get_contacts(
    latitude: float = Query(...),
    longitude: float = Query(...),
    geocoder: ReverseGeocoder = Depends(get_geocoder),
) -> ContactDirectory:
    location_name = geocoder.location_name(latitude, longitude)
    state = resolve_state(location_name)
    logger.info("Resolved complaint region", extra={"state": state})
    return ContactDirectory(
        location_name=location_name,
        state=state,
        organizations=[
            Organization.model_validate(org) for org in organizations_for_state(state)
        ],
        checklist=list(REPORTING_CHECKLIST),
    )


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
