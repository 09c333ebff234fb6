"""Discovery request validation and sanitization.

Validation is all-or-nothing: a request either comes back fully sanitized
as a ``DiscoveryRequest`` or is rejected with a list of human-readable
errors. Nothing is partially applied.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

import structlog
from pydantic import BaseModel, ConfigDict, Field

from prospector.config import Settings
from prospector.models.request import DiscoveryRequest, FocusArea, Location

logger = structlog.get_logger()

_SCRIPT_BLOCK = re.compile(r"<script[^>]*>[\s\S]*?</script>", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"on\w+\s*=", re.IGNORECASE)
_JS_PROTOCOL = re.compile(r"javascript:", re.IGNORECASE)
_DATA_PROTOCOL = re.compile(r"data:", re.IGNORECASE)
_HTML_TAG = re.compile(r"<[^>]*>")

_TRIVIAL_PROMPTS = (
    re.compile(r"^[^a-zA-Z]*$"),
    re.compile(r"^(test|testing|hello|hi|hey)\s*$", re.IGNORECASE),
)
_TEMPLATE_ID = re.compile(r"^[a-z0-9-]+$")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

MAX_LOCATION_FIELD_LENGTH = 100
MAX_TEMPLATE_ID_LENGTH = 50


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: bool
    errors: list[str] = Field(default_factory=list)
    sanitized: DiscoveryRequest | None = None


# ---------------------------------------------------------------------------
# Sanitization
# ---------------------------------------------------------------------------


def sanitize_input(value: object) -> str:
    """Strip markup and script vectors from a short free-text field."""
    if not isinstance(value, str):
        return ""
    text = value.replace("\0", "")
    text = _SCRIPT_BLOCK.sub("", text)
    text = _EVENT_HANDLER.sub("", text)
    text = _JS_PROTOCOL.sub("", text)
    text = _DATA_PROTOCOL.sub("", text)
    text = _HTML_TAG.sub("", text)
    return re.sub(r"\s+", " ", text).strip()


def sanitize_prompt(value: object) -> str:
    """Sanitize a prompt while keeping its paragraph structure.

    More permissive than ``sanitize_input``: tags other than ``<script>``
    survive, and single blank lines between paragraphs are kept.
    """
    if not isinstance(value, str):
        return ""
    text = value.replace("\0", "")
    text = _SCRIPT_BLOCK.sub("", text)
    text = _JS_PROTOCOL.sub("", text)
    text = _DATA_PROTOCOL.sub("", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    text = re.sub(r"[ \t]+", " ", text)
    return text.strip()


# ---------------------------------------------------------------------------
# Field validators
# ---------------------------------------------------------------------------


def validate_prompt(prompt: object, settings: Settings) -> tuple[list[str], str | None]:
    """Return ``(errors, sanitized_prompt)``; the prompt is None on failure."""
    if not isinstance(prompt, str):
        return ["Prompt must be a string"], None

    sanitized = sanitize_prompt(prompt)
    errors: list[str] = []

    if len(sanitized) < settings.min_prompt_length:
        errors.append(f"Prompt must be at least {settings.min_prompt_length} characters")
    if len(sanitized) > settings.max_prompt_length:
        errors.append(f"Prompt must be less than {settings.max_prompt_length} characters")

    meaningful = [word for word in sanitized.split() if len(word) > 2]
    if len(meaningful) < 3:
        errors.append("Prompt must contain at least 3 meaningful words")

    if any(pattern.search(sanitized) for pattern in _TRIVIAL_PROMPTS):
        errors.append("Please enter a valid search description")

    return errors, (sanitized if not errors else None)


def validate_max_results(
    max_results: object, settings: Settings, *, deep_research: bool = False
) -> tuple[list[str], int]:
    """Bounds-check the requested result count for the given mode.

    Deep research trades volume for depth, so its window is narrower.
    """
    if deep_research:
        default, low, high = settings.deep_default_results, 1, settings.deep_max_results
    else:
        default = settings.default_results
        low, high = settings.min_results_limit, settings.max_results_limit

    if max_results is None:
        return [], default

    if isinstance(max_results, bool):
        return ["Max results must be a number"], default
    if isinstance(max_results, int):
        parsed = max_results
    elif isinstance(max_results, float):
        if max_results != max_results:  # NaN
            return ["Max results must be a number"], default
        parsed = int(max_results)
    else:
        match = _LEADING_INT.match(str(max_results))
        if match is None:
            return ["Max results must be a number"], default
        parsed = int(match.group(1))

    if parsed < low:
        return [f"Max results must be at least {low}"], low
    if parsed > high:
        return [f"Max results cannot exceed {high}"], high
    return [], parsed


def validate_focus_areas(focus_areas: object) -> tuple[list[str], list[FocusArea] | None]:
    """Keep known focus areas and silently drop the rest."""
    if focus_areas is None:
        return [], None
    if not isinstance(focus_areas, list | tuple):
        return ["Focus areas must be an array"], None

    accepted: list[FocusArea] = []
    for area in focus_areas:
        try:
            focus = FocusArea(area)
        except ValueError:
            logger.debug("focus_area_discarded", value=str(area)[:50])
            continue
        if focus not in accepted:
            accepted.append(focus)

    return [], (accepted or None)


def validate_location(location: object) -> tuple[list[str], Location | None]:
    if location is None:
        return [], None
    if not isinstance(location, Mapping):
        return ["Location must be an object"], None

    errors: list[str] = []
    fields: dict[str, str] = {}
    for key in ("city", "state", "region"):
        raw = location.get(key)
        if raw is None:
            continue
        label = key.capitalize()
        if not isinstance(raw, str):
            errors.append(f"{label} must be a string")
            continue
        cleaned = sanitize_input(raw)
        if len(cleaned) > MAX_LOCATION_FIELD_LENGTH:
            errors.append(f"{label} must be less than {MAX_LOCATION_FIELD_LENGTH} characters")
        elif cleaned:
            fields[key] = cleaned

    if errors:
        return errors, None
    return [], (Location(**fields) if fields else None)


def validate_template_id(template_id: object) -> tuple[list[str], str | None]:
    if template_id is None:
        return [], None
    if not isinstance(template_id, str):
        return ["Template ID must be a string"], None

    cleaned = sanitize_input(template_id)
    if not _TEMPLATE_ID.match(cleaned):
        return ["Invalid template ID format"], None
    if len(cleaned) > MAX_TEMPLATE_ID_LENGTH:
        return ["Template ID too long"], None
    return [], cleaned


# ---------------------------------------------------------------------------
# Request validation
# ---------------------------------------------------------------------------


def validate_discovery_request(body: object, settings: Settings | None = None) -> ValidationResult:
    """Validate a raw request body into a sanitized ``DiscoveryRequest``.

    Accepts both camelCase wire keys (``maxResults``) and snake_case keys.
    """
    settings = settings or Settings()

    if not isinstance(body, Mapping):
        return ValidationResult(valid=False, errors=["Request body must be an object"])

    def field(camel: str, snake: str) -> object:
        return body[camel] if camel in body else body.get(snake)

    deep_research = field("deepResearch", "deep_research") is True

    errors: list[str] = []
    prompt_errors, prompt = validate_prompt(body.get("prompt"), settings)
    errors.extend(prompt_errors)

    max_errors, max_results = validate_max_results(
        field("maxResults", "max_results"), settings, deep_research=deep_research
    )
    errors.extend(max_errors)

    template_errors, template_id = validate_template_id(field("templateId", "template_id"))
    errors.extend(template_errors)

    location_errors, location = validate_location(body.get("location"))
    errors.extend(location_errors)

    focus_errors, focus_areas = validate_focus_areas(field("focusAreas", "focus_areas"))
    errors.extend(focus_errors)

    if errors or prompt is None:
        logger.info("discovery_request_rejected", error_count=len(errors))
        return ValidationResult(valid=False, errors=errors)

    request = DiscoveryRequest(
        prompt=prompt,
        max_results=max_results,
        template_id=template_id,
        location=location,
        focus_areas=focus_areas,
        deep_research=deep_research,
    )
    return ValidationResult(valid=True, sanitized=request)
