"""Reverse geocoding against a Nominatim-compatible endpoint."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

import httpx

from settings import get_settings

logger = logging.getLogger(__name__)

UNKNOWN_LOCATION = "Unknown Location"


class ReverseGeocoder:
    """Turns coordinates into a display name. Never raises on lookup failure."""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        user_agent: str = "noise-map/0.1",
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.url = url
        self._client = httpx.Client(
            timeout=timeout,
            headers={"User-Agent": user_agent},
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def location_name(self, latitude: float, longitude: float) -> str:
        params = {
            "format": "json",
            "lat": latitude,
            "lon": longitude,
            "zoom": 18,
            "addressdetails": 1,
        }
        try:
            response = self._client.get(self.url, params=params)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning(
                "Reverse geocoding failed",
                extra={"latitude": latitude, "longitude": longitude, "reason": str(exc)},
            )
            return UNKNOWN_LOCATION

        name = payload.get("display_name") if isinstance(payload, dict) else None
        if not isinstance(name, str) or not name.strip():
            return UNKNOWN_LOCATION
        return name


@lru_cache
def build_default_geocoder() -> ReverseGeocoder:
    settings = get_settings()
    return ReverseGeocoder(
        url=settings.geocoder_url,
        timeout=settings.geocoder_timeout,
        user_agent=settings.geocoder_user_agent,
    )
