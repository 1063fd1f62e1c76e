"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (cache, background
cache writer, telemetry, tables, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.application.services.cache_writer import CacheWriter
from app.core.config import get_settings

logger = logging.getLogger(__name__)

# Upper bound for flushing in-flight cache writes at shutdown.
CACHE_DRAIN_TIMEOUT_SECONDS = 5.0


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: Redis cache (if enabled) and its background writer,
    tables (if DATABASE_AUTO_CREATE), telemetry (if enabled). Shutdown
    order: drain cache writes, cache disconnect, telemetry shutdown, SQL
    engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    if settings.redis_enabled:
        from app.infrastructure.cache.redis_cache import CacheService

        cache = CacheService(settings=settings)
        await cache.connect()
        app.state.cache = cache
        app.state.cache_writer = CacheWriter(cache)
    else:
        app.state.cache = None
        app.state.cache_writer = None

    from app.infrastructure.persistence import database

    if settings.database_auto_create:
        await database.create_tables()

    if settings.telemetry_enabled:
        from app.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument(app, database.get_engine())
        logger.info("Telemetry initialized")

    yield

    # ---- Shutdown ----
    writer = getattr(app.state, "cache_writer", None)
    if writer is not None:
        await writer.drain(timeout=CACHE_DRAIN_TIMEOUT_SECONDS)

    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        logger.info("Cache disconnected")

    from app.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)

    await database.dispose_engine()
    logger.info("Database engine disposed")
