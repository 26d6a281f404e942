from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_LOG_LEVEL_ENV = "LOG_LEVEL"
_RANDOM_SEED_ENV = "NOISE_RANDOM_SEED"
_DEFAULT_LATITUDE_ENV = "NOISE_DEFAULT_LATITUDE"
_DEFAULT_LONGITUDE_ENV = "NOISE_DEFAULT_LONGITUDE"
_LOCAL_RADIUS_ENV = "NOISE_LOCAL_RADIUS_KM"
_NEARBY_RADIUS_ENV = "NOISE_NEARBY_RADIUS_KM"
_REFRESH_ENABLED_ENV = "NOISE_REFRESH_ENABLED"
_LOCAL_REFRESH_ENV = "NOISE_LOCAL_REFRESH_SECONDS"
_NEARBY_REFRESH_ENV = "NOISE_NEARBY_REFRESH_SECONDS"
_GEOCODER_URL_ENV = "GEOCODER_URL"
_GEOCODER_TIMEOUT_ENV = "GEOCODER_TIMEOUT"
_GEOCODER_USER_AGENT_ENV = "GEOCODER_USER_AGENT"


@dataclass(frozen=True)
class Settings:
    log_level: str
    random_seed: Optional[int]
    default_latitude: Optional[float]
    default_longitude: Optional[float]
    local_radius_km: float
    nearby_radius_km: float
    refresh_enabled: bool
    local_refresh_seconds: float
    nearby_refresh_seconds: float
    geocoder_url: str
    geocoder_timeout: float
    geocoder_user_agent: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None:
        return None
    candidate = value.strip()
    if not candidate:
        return None
    try:
        return int(candidate)
    except ValueError:
        return None


def _read_optional_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    if value is None:
        return None
    candidate = value.strip()
    if not candidate:
        return None
    try:
        return float(candidate)
    except ValueError:
        return None


def _read_positive_float(name: str, default: float) -> float:
    parsed = _read_optional_float(name)
    if parsed is None:
        return default
    return parsed if parsed > 0 else default


def _read_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip().lower()
    if not candidate:
        return default
    return candidate in {"1", "true", "yes", "on"}


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        log_level=_read_log_level("INFO"),
        random_seed=_read_optional_int(_RANDOM_SEED_ENV),
        default_latitude=_read_optional_float(_DEFAULT_LATITUDE_ENV),
        default_longitude=_read_optional_float(_DEFAULT_LONGITUDE_ENV),
        local_radius_km=_read_positive_float(_LOCAL_RADIUS_ENV, 5.0),
        nearby_radius_km=_read_positive_float(_NEARBY_RADIUS_ENV, 20.0),
        refresh_enabled=_read_bool(_REFRESH_ENABLED_ENV, True),
        local_refresh_seconds=_read_positive_float(_LOCAL_REFRESH_ENV, 60.0),
        nearby_refresh_seconds=_read_positive_float(_NEARBY_REFRESH_ENV, 7200.0),
        geocoder_url=_read_str_env(
            _GEOCODER_URL_ENV, "https://nominatim.openstreetmap.org/reverse"
        ),
        geocoder_timeout=_read_positive_float(_GEOCODER_TIMEOUT_ENV, 10.0),
        geocoder_user_agent=_read_str_env(_GEOCODER_USER_AGENT_ENV, "noise-map/0.1"),
    )
