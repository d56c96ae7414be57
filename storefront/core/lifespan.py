"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: shared HTTP client, cache
backend (Redis or in-process), object storage and the DB engine.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from storefront.core.config import get_settings
from storefront.infrastructure.cache import CacheService, InMemoryCache
from storefront.infrastructure.external.storage import create_storage_service
from storefront.infrastructure.persistence.database import dispose_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: shared HTTP client (shipping provider), cache, storage.
    Shutdown order: HTTP client close, cache disconnect, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    app.state.http_client = httpx.AsyncClient(timeout=settings.shipping_timeout_seconds)

    if settings.redis_enabled:
        cache = CacheService()
        await cache.connect()
        app.state.cache = cache
    else:
        app.state.cache = InMemoryCache()
        logger.info("Redis disabled; using in-process cache")

    app.state.storage = create_storage_service(settings)

    yield

    # ---- Shutdown ----
    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("HTTP client closed")

    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        logger.info("Cache disconnected")

    await dispose_engine()
