"""FastAPI dependency injection."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from prospector.config import Settings
from prospector.engine import DiscoveryEngine
from prospector.protocols import SearchProvider


def _get_settings(request: Request) -> Settings:
    """Get the settings instance from app state."""
    return request.app.state.settings  # type: ignore[no-any-return]


def _get_engine(request: Request) -> DiscoveryEngine:
    return request.app.state.engine  # type: ignore[no-any-return]


def _get_provider(request: Request) -> SearchProvider:
    return request.app.state.provider  # type: ignore[no-any-return]


SettingsDep = Annotated[Settings, Depends(_get_settings)]
EngineDep = Annotated[DiscoveryEngine, Depends(_get_engine)]
ProviderDep = Annotated[SearchProvider, Depends(_get_provider)]
