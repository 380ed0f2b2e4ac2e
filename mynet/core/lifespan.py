"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
only wiring of infrastructure (cache store, expiry sweep, telemetry).
The cache store itself is built in create_app() so the response cache
middleware can receive it explicitly.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from mynet.core.config import get_settings
from mynet.infrastructure.cache.memory_cache import InMemoryCacheStore

logger = logging.getLogger(__name__)


async def run_cache_sweep(store: InMemoryCacheStore, interval_seconds: int) -> None:
    """Periodically drop expired in-memory entries. Runs until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        store.purge_expired()


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: telemetry (if enabled), cache store connect, expiry
    sweep (in-memory store only). Shutdown runs in reverse.
    """
    settings = get_settings()

    # ---- Startup ----
    telemetry = None
    if settings.telemetry_enabled:
        from mynet.shared.telemetry.telemetry import Telemetry

        telemetry = Telemetry(settings)
        telemetry.setup()
        telemetry.instrument_app(app)

    cache = getattr(app.state, "cache", None)
    sweep_task = None
    if cache is not None:
        await cache.connect()
        if isinstance(cache, InMemoryCacheStore) and settings.cache_sweep_interval_seconds > 0:
            sweep_task = asyncio.create_task(
                run_cache_sweep(cache, settings.cache_sweep_interval_seconds)
            )

    yield

    # ---- Shutdown ----
    if sweep_task is not None:
        sweep_task.cancel()
        try:
            await sweep_task
        except asyncio.CancelledError:
            pass
        logger.info("Cache sweep task stopped")

    if cache is not None:
        await cache.disconnect()
        logger.info("Cache disconnected")

    if telemetry is not None:
        telemetry.shutdown()
        logger.info("Telemetry shut down")
