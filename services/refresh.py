"""Periodic dashboard refresh: local view every minute, wider area every two hours."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from dataclasses import replace
from datetime import tzinfo
from functools import lru_cache
from typing import Awaitable, Callable, Dict, List, Optional, Set

from models.records import DashboardSnapshot, FilterCriteria, NoiseReading, UserLocation
from services.analytics import (
    analyze_pattern,
    assess_health_impact,
    predict_next_day,
    summarize_readings,
)
from services.generator import current_time_ms
from services.geocoding import ReverseGeocoder, build_default_geocoder
from services.readings import get_readings
from settings import get_settings

logger = logging.getLogger(__name__)

NEARBY_REFRESH_MS = 2 * 60 * 60 * 1000

LocationProvider = Callable[[], Optional[UserLocation]]


def _same_place(first: Optional[UserLocation], second: Optional[UserLocation]) -> bool:
    if first is None or second is None:
        return first is second
    return (first.latitude, first.longitude) == (second.latitude, second.longitude)


def refresh_dashboard(
    location: Optional[UserLocation],
    previous: Optional[DashboardSnapshot],
    *,
    now_ms: int,
    rng: Optional[random.Random] = None,
    tz: Optional[tzinfo] = None,
    local_radius_km: float = 5.0,
    nearby_radius_km: float = 20.0,
    nearby_interval_ms: int = NEARBY_REFRESH_MS,
    force_nearby: bool = False,
) -> DashboardSnapshot:
    """Build the next snapshot from the previous one.

    Local readings and every derived metric are always recomputed. The nearby
    batch needs a location: it is reloaded when forced, when it was never
    loaded, when the location has moved, or once ``nearby_interval_ms`` has
    passed since the last reload. Otherwise it is carried over together with
    its timestamps. Without a location the local view falls back to the
    ungrounded city readings.
    """
    rng = rng or random.Random()
    criteria = (
        FilterCriteria(center=location, radius_km=local_radius_km)
        if location is not None
        else FilterCriteria()
    )
    local = get_readings(criteria, rng=rng, now_ms=now_ms, tz=tz)

    nearby: List[NoiseReading] = previous.nearby_readings if previous is not None else []
    nearby_location = previous.nearby_location if previous is not None else None
    last_nearby_update_ms = (
        previous.last_nearby_update_ms if previous is not None else None
    )
    if location is not None and (
        force_nearby
        or last_nearby_update_ms is None
        or not _same_place(nearby_location, location)
        or now_ms - last_nearby_update_ms >= nearby_interval_ms
    ):
        nearby = get_readings(
            FilterCriteria(center=location, radius_km=nearby_radius_km),
            rng=rng,
            now_ms=now_ms,
            tz=tz,
        )
        nearby_location = location
        last_nearby_update_ms = now_ms

    location_name = None
    if previous is not None and location is not None and _same_place(previous.location, location):
        location_name = previous.location_name

    return DashboardSnapshot(
        location=location,
        local_readings=local,
        nearby_readings=nearby,
        analysis=analyze_pattern(local),
        health=assess_health_impact(local),
        prediction=predict_next_day(local, rng=rng, tz=tz),
        statistics=summarize_readings(local),
        refreshed_at_ms=now_ms,
        last_nearby_update_ms=last_nearby_update_ms,
        next_nearby_update_ms=(
            last_nearby_update_ms + nearby_interval_ms
            if last_nearby_update_ms is not None
            else None
        ),
        location_name=location_name,
        nearby_location=nearby_location,
    )


class DashboardRefresher:
    """Runs the local and nearby refreshes as two independent periodic tasks.

    A run of a task is skipped while the previous run of the same task is
    still in flight. Each completed run replaces :attr:`latest` wholesale; a
    failed run is logged and the previous snapshot stays in place.
    """

    def __init__(
        self,
        location_provider: LocationProvider,
        *,
        rng: Optional[random.Random] = None,
        geocoder: Optional[ReverseGeocoder] = None,
        local_interval: float = 60.0,
        nearby_interval: float = 7200.0,
        local_radius_km: float = 5.0,
        nearby_radius_km: float = 20.0,
        clock: Callable[[], int] = current_time_ms,
    ) -> None:
        self.location_provider = location_provider
        self.rng = rng or random.Random()
        self.geocoder = geocoder
        self.local_interval = local_interval
        self.nearby_interval = nearby_interval
        self.local_radius_km = local_radius_km
        self.nearby_radius_km = nearby_radius_km
        self.clock = clock
        self.latest: Optional[DashboardSnapshot] = None
        self._in_flight: Set[str] = set()
        self._tasks: Dict[str, asyncio.Task[None]] = {}

    @property
    def running(self) -> bool:
        return bool(self._tasks)

    async def start(self) -> None:
        if self._tasks:
            return
        await self.refresh_local()
        self._tasks = {
            "local": asyncio.create_task(
                self._run_periodic(self.local_interval, self.refresh_local)
            ),
            "nearby": asyncio.create_task(
                self._run_periodic(self.nearby_interval, self.refresh_nearby)
            ),
        }
        logger.info("Dashboard refresher started", extra={"status": "running"})

    async def stop(self) -> None:
        tasks = list(self._tasks.values())
        self._tasks = {}
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("Dashboard refresher stopped", extra={"status": "stopped"})

    async def refresh_local(self) -> None:
        await self._run_once("local", force_nearby=False)

    async def refresh_nearby(self) -> None:
        await self._run_once("nearby", force_nearby=True)

    async def _run_periodic(
        self, interval: float, job: Callable[[], Awaitable[None]]
    ) -> None:
        while True:
            await asyncio.sleep(interval)
            await job()

    async def _run_once(self, name: str, force_nearby: bool) -> None:
        if name in self._in_flight:
            logger.debug("Skipping overlapping refresh", extra={"task": name})
            return
        self._in_flight.add(name)
        started = time.perf_counter()
        try:
            location = await self._locate()
            snapshot = refresh_dashboard(
                location,
                self.latest,
                now_ms=self.clock(),
                rng=self.rng,
                local_radius_km=self.local_radius_km,
                nearby_radius_km=self.nearby_radius_km,
                nearby_interval_ms=int(self.nearby_interval * 1000),
                force_nearby=force_nearby,
            )
            if location is not None and self.geocoder is not None:
                name_label = await asyncio.to_thread(
                    self.geocoder.location_name, location.latitude, location.longitude
                )
                snapshot = replace(snapshot, location_name=name_label)
            self.latest = snapshot
            logger.info(
                "Dashboard refreshed",
                extra={
                    "task": name,
                    "reading_count": len(snapshot.local_readings),
                    "elapsed_ms": int((time.perf_counter() - started) * 1000),
                },
            )
        except Exception:
            logger.exception(
                "Dashboard refresh failed; keeping previous data", extra={"task": name}
            )
        finally:
            self._in_flight.discard(name)

    async def _locate(self) -> Optional[UserLocation]:
        try:
            return self.location_provider()
        except Exception as exc:  # noqa: BLE001 - any provider failure means "no centre"
            logger.warning("Location unavailable", extra={"reason": str(exc)})
            return None


def fixed_location_provider(location: Optional[UserLocation]) -> LocationProvider:
    def provide() -> Optional[UserLocation]:
        return location

    return provide


@lru_cache
def build_default_refresher() -> DashboardRefresher:
    """Factory that wires the refresher from environment settings."""
    settings = get_settings()
    location: Optional[UserLocation] = None
    if settings.default_latitude is not None and settings.default_longitude is not None:
        location = UserLocation(
            latitude=settings.default_latitude, longitude=settings.default_longitude
        )
    geocoder = build_default_geocoder() if location is not None else None
    return DashboardRefresher(
        fixed_location_provider(location),
        rng=random.Random(settings.random_seed),
        geocoder=geocoder,
        local_interval=settings.local_refresh_seconds,
        nearby_interval=settings.nearby_refresh_seconds,
        local_radius_km=settings.local_radius_km,
        nearby_radius_km=settings.nearby_radius_km,
    )
