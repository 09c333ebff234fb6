"""Prospect discovery endpoints."""

from __future__ import annotations

import json

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from prospector.api.deps import EngineDep, SettingsDep
from prospector.api.middleware import error_response
from prospector.api.schemas import TemplateListResponse
from prospector.models.result import DiscoveryErrorCode
from prospector.templates import CATEGORY_LABELS, DISCOVERY_TEMPLATES, get_categories
from prospector.validation import validate_discovery_request

logger = structlog.get_logger()

router = APIRouter(tags=["discovery"])

_FAILURE_STATUS: dict[DiscoveryErrorCode, int] = {
    DiscoveryErrorCode.LINKUP_UNAVAILABLE: 503,
    DiscoveryErrorCode.TIMEOUT: 504,
}


@router.post("/discovery")
async def run_discovery(
    request: Request,
    engine: EngineDep,
    settings: SettingsDep,
) -> JSONResponse:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return error_response("Invalid JSON in request body", DiscoveryErrorCode.INVALID_REQUEST, 400)

    validation = validate_discovery_request(body, settings)
    if not validation.valid or validation.sanitized is None:
        return error_response(
            ". ".join(validation.errors),
            DiscoveryErrorCode.INVALID_REQUEST,
            400,
            {"validationErrors": validation.errors},
        )

    discovery_request = validation.sanitized
    logger.info(
        "discovery_requested",
        prompt_preview=discovery_request.prompt[:50],
        max_results=discovery_request.max_results,
        template_id=discovery_request.template_id,
    )
    result = await engine.discover(discovery_request)

    if result.success:
        status_code = 200
    else:
        status_code = _FAILURE_STATUS.get(result.error_code, 500) if result.error_code else 500
    return JSONResponse(status_code=status_code, content=result.to_wire())


@router.get("/discovery/templates", response_model=TemplateListResponse)
def list_templates() -> TemplateListResponse:
    return TemplateListResponse(
        templates=DISCOVERY_TEMPLATES,
        categories={c.value: CATEGORY_LABELS[c] for c in get_categories()},
    )
