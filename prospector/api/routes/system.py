"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from prospector.api.deps import ProviderDep
from prospector.api.schemas import HealthResponse

router = APIRouter(tags=["system"])


@router.get("/health", response_model=HealthResponse)
def health_check(provider: ProviderDep) -> HealthResponse:
    status = provider.status()
    return HealthResponse(
        status="healthy" if status.available else "degraded",
        version="0.1.0",
        search_available=status.available,
        reasons=status.reasons,
    )
