from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.api import router
from logging_config import configure_logging
from services.geocoding import build_default_geocoder
from services.refresh import build_default_refresher
from settings import get_settings


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    refresher = build_default_refresher()
    if get_settings().refresh_enabled:
        await refresher.start()
    try:
        yield
    finally:
        await refresher.stop()
        build_default_refresher.cache_clear()
        if build_default_geocoder.cache_info().currsize:
            build_default_geocoder().close()
            build_default_geocoder.cache_clear()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Noise Map",
        description="Simulated noise readings, hotspots and analytics for noise-pollution mapping.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(router)
    return app

app = create_app()
