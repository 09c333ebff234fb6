"""FastAPI test client fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from prospector.api.middleware import CorrelationIdMiddleware, add_exception_handlers
from prospector.api.routes import discovery, system
from prospector.engine import DiscoveryEngine

if TYPE_CHECKING:
    from prospector.config import Settings
    from prospector.protocols import SearchProvider


def _create_test_app(provider: SearchProvider, settings: Settings) -> FastAPI:
    """Create a FastAPI app with an injected provider and settings (no lifespan)."""
    app = FastAPI(title="Prospector Test")

    app.state.settings = settings
    app.state.provider = provider
    app.state.engine = DiscoveryEngine(provider, settings=settings)

    app.add_middleware(CorrelationIdMiddleware)
    add_exception_handlers(app)

    prefix = "/api/v1"
    app.include_router(system.router, prefix=prefix)
    app.include_router(discovery.router, prefix=prefix)

    return app


@pytest.fixture()
def client_for(settings: Settings):
    """Build a TestClient around a given search provider."""

    def build(provider: SearchProvider, app_settings: Settings | None = None) -> TestClient:
        return TestClient(_create_test_app(provider, app_settings or settings))

    return build


@pytest.fixture()
def client(client_for, make_provider, record) -> TestClient:
    answers = [record("Eleanor Whitfield") + record("Marcus Bell"), record("Priya Raman"), ""]
    return client_for(make_provider(answers))
