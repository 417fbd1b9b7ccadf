from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from leave_bridge.api.health import router as health_router
from leave_bridge.api.router import api_router
from leave_bridge.config import get_settings
from leave_bridge.db import dispose_engine
from leave_bridge.exceptions import setup_exception_handlers
from leave_bridge.middleware import setup_middleware
from leave_bridge.services.gateway import HttpLeaveGateway

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from leave_bridge.config import Settings

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging for the API process."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the HR platform gateway on startup; release connections on shutdown."""
    settings = get_settings()
    logger.info("Starting %s v%s [%s]", settings.app_name, settings.app_version, settings.environment)
    if not settings.oracle_token:
        logger.warning("ORACLE_TOKEN is not set; HR platform calls will be rejected upstream")
    gateway = HttpLeaveGateway.from_settings(settings)
    app.state.leave_gateway = gateway
    try:
        yield
    finally:
        await gateway.aclose()
        await dispose_engine()
        logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """Application factory."""
    settings = get_settings()
    configure_logging(settings)

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.environment != "production" else None,
        redoc_url="/redoc" if settings.environment != "production" else None,
    )

    setup_middleware(application, settings)
    setup_exception_handlers(application)

    application.include_router(health_router)
    application.include_router(api_router)

    return application


app = create_app()
