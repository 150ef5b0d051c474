"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from tokenimage.api.routes import health, token_image
from tokenimage.config.logging import configure_logging
from tokenimage.config.settings import get_settings
from tokenimage.core.tasks import drain_background_tasks
from tokenimage.data.cache.factory import close_cache_store, get_cache_store
from tokenimage.services.coingecko.client import close_coingecko_client, get_coingecko_client

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    configure_logging()
    log.info("application_starting")

    # A cache that cannot connect still yields a store; reads then miss
    await get_cache_store()
    await get_coingecko_client()

    log.info("application_started")

    yield

    # Shutdown
    log.info("application_stopping")
    await drain_background_tasks()
    await close_coingecko_client()
    await close_cache_store()
    log.info("application_stopped")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Token icons by ticker symbol, sourced from CoinGecko",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Routes
    app.include_router(health.router)
    app.include_router(token_image.router)

    return app
