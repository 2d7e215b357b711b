"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (Cosmic client, cache, telemetry).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from wanderbites.core.config import get_settings
from wanderbites.infrastructure.cosmic import CosmicRESTClient
from wanderbites.shared.telemetry.logging import setup_logging
from wanderbites.shared.telemetry.telemetry import get_telemetry, set_telemetry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, shared HTTP client and Cosmic client,
    WebSocket manager, Redis cache (if enabled), Redis instrumentation (if
    telemetry is on). Shutdown order: search sessions, Cosmic client, shared
    HTTP client, cache, telemetry.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    # Shared HTTP client for every Cosmic call (connection reuse).
    app.state.http_client = httpx.AsyncClient(timeout=settings.cosmic_timeout_seconds)
    app.state.cosmic_client = CosmicRESTClient(
        settings.cosmic_bucket_slug,
        settings.cosmic_read_key.get_secret_value(),
        base_url=settings.cosmic_api_url,
        http_client=app.state.http_client,
    )
    logger.info("Cosmic client ready for bucket %s", settings.cosmic_bucket_slug)

    from wanderbites.api.websocket import ConnectionManager

    app.state.ws_manager = ConnectionManager()

    if settings.redis_enabled:
        from wanderbites.infrastructure.cache.redis_cache import CacheService

        cache = CacheService(settings)
        await cache.connect()
        app.state.cache = cache
    else:
        app.state.cache = None

    # Tracer provider and FastAPI instrumentation are set up in create_app();
    # middleware cannot be added once the app is running.
    telemetry = get_telemetry()
    if telemetry is not None and settings.redis_enabled:
        telemetry.instrument_redis()

    yield

    # ---- Shutdown ----
    if getattr(app.state, "ws_manager", None) is not None:
        await app.state.ws_manager.close_all()

    if getattr(app.state, "cosmic_client", None) is not None:
        await app.state.cosmic_client.aclose()
        app.state.cosmic_client = None

    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("HTTP client closed")

    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        logger.info("Cache disconnected")

    telemetry = get_telemetry()
    if telemetry is not None:
        telemetry.shutdown()
        set_telemetry(None)
