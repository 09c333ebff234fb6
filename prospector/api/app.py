"""FastAPI application factory and entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from fastapi import FastAPI

from prospector.api.middleware import CorrelationIdMiddleware, add_exception_handlers
from prospector.api.routes import discovery, system
from prospector.clients.linkup import LinkupClient
from prospector.config import Settings
from prospector.engine import DiscoveryEngine
from prospector.logging import configure_logging
from prospector.telemetry import QueueTelemetry

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Build the search provider, telemetry and engine; drain telemetry on shutdown."""
    settings = Settings()

    configure_logging(
        log_level=settings.log_level,
        log_format=settings.log_format,
    )

    provider = LinkupClient.from_settings(settings)
    telemetry = QueueTelemetry(maxsize=settings.telemetry_queue_size)

    app.state.settings = settings
    app.state.provider = provider
    app.state.engine = DiscoveryEngine(provider, settings=settings, telemetry=telemetry)

    logger.info(
        "Prospector API started",
        host=settings.api_host,
        port=settings.api_port,
        search_available=provider.is_available,
    )
    yield

    telemetry.close()
    logger.info("Prospector API shut down")


def create_app() -> FastAPI:
    """Application factory."""
    app = FastAPI(
        title="Prospector",
        description="Donor prospect discovery API",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(CorrelationIdMiddleware)
    add_exception_handlers(app)

    # Prometheus metrics endpoint
    from prometheus_client import make_asgi_app

    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    # Mount routes under /api/v1
    prefix = "/api/v1"
    app.include_router(system.router, prefix=prefix)
    app.include_router(discovery.router, prefix=prefix)

    return app


def main() -> None:
    """Entry point for `prospector-api` command."""
    import uvicorn

    settings = Settings()
    uvicorn.run(
        "prospector.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
    )
