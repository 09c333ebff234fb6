"""Click CLI entry point for Prospector."""

from __future__ import annotations

import asyncio
import json
import sys

import click

from prospector.clients.linkup import LinkupClient
from prospector.config import Settings
from prospector.engine import DiscoveryEngine
from prospector.logging import configure_logging
from prospector.models.request import FocusArea
from prospector.models.result import DiscoveryResult
from prospector.telemetry import QueueTelemetry
from prospector.templates import (
    CATEGORY_LABELS,
    TemplateError,
    fill_template_placeholders,
    get_categories,
    get_template_by_id,
    get_templates_by_category,
    validate_placeholder_values,
)
from prospector.validation import validate_discovery_request


def _build_provider(settings: Settings) -> LinkupClient:
    return LinkupClient.from_settings(settings)


def _run_discovery(settings: Settings, body: dict[str, object]) -> DiscoveryResult:
    validation = validate_discovery_request(body, settings)
    if not validation.valid or validation.sanitized is None:
        for error in validation.errors:
            click.echo(f"Error: {error}", err=True)
        sys.exit(2)

    telemetry = QueueTelemetry(maxsize=settings.telemetry_queue_size)
    try:
        engine = DiscoveryEngine(_build_provider(settings), settings=settings, telemetry=telemetry)
        return asyncio.run(engine.discover(validation.sanitized))
    finally:
        telemetry.close()


def _print_result(result: DiscoveryResult) -> None:
    if not result.success:
        click.echo(f"Discovery failed [{result.error_code}]: {result.error}", err=True)
        return

    click.echo(
        f"Found {result.total_found} prospects in {result.duration_ms}ms "
        f"({result.query_count} queries, ~{result.estimated_cost_cents}c)"
    )
    for i, prospect in enumerate(result.prospects, start=1):
        role = ", ".join(part for part in (prospect.title, prospect.company) if part)
        place = ", ".join(part for part in (prospect.city, prospect.state) if part)
        click.echo(f"\n  {i:2d}. {prospect.name} [{prospect.confidence.value}]")
        if role:
            click.echo(f"      {role}")
        if place:
            click.echo(f"      {place}")
        for reason in prospect.match_reasons:
            click.echo(f"      - {reason}")
        for source in prospect.sources:
            click.echo(f"      > {source.url}")
    for warning in result.warnings or []:
        click.echo(f"\nWarning: {warning}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Prospector: discover donor prospects from a plain-language description."""
    ctx.ensure_object(dict)
    settings = Settings()
    log_level = "DEBUG" if verbose else settings.log_level
    configure_logging(log_level=log_level, log_format=settings.log_format)
    ctx.obj["settings"] = settings
    ctx.obj["verbose"] = verbose


@cli.command()
@click.argument("prompt", required=False)
@click.option("--max-results", type=int, default=None, help="Number of prospects to return")
@click.option("--deep", is_flag=True, help="Use deep research (slower, max 5 results)")
@click.option("--template", "template_id", type=str, default=None, help="Start from a template")
@click.option("--city", type=str, default=None)
@click.option("--state", type=str, default=None)
@click.option("--region", type=str, default=None)
@click.option("--cause", type=str, default=None, help="Cause area for templates that use one")
@click.option(
    "--focus",
    "focus_areas",
    multiple=True,
    type=click.Choice([f.value for f in FocusArea]),
    help="Signal family to prioritize (repeatable)",
)
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON result")
@click.pass_context
def discover(
    ctx: click.Context,
    prompt: str | None,
    max_results: int | None,
    deep: bool,
    template_id: str | None,
    city: str | None,
    state: str | None,
    region: str | None,
    cause: str | None,
    focus_areas: tuple[str, ...],
    as_json: bool,
) -> None:
    """Find prospects matching PROMPT (or a filled --template)."""
    settings = ctx.obj["settings"]

    if template_id:
        template = get_template_by_id(template_id)
        if template is None:
            click.echo(f"Template '{template_id}' not found.", err=True)
            sys.exit(1)
        values = {"[city]": city or "", "[state]": state or "", "[cause]": cause or ""}
        valid, errors = validate_placeholder_values(template, values)
        if not valid:
            for error in errors:
                click.echo(f"Error: {error}", err=True)
            sys.exit(2)
        try:
            prompt = fill_template_placeholders(template, values)
        except TemplateError as exc:
            click.echo(f"Error: {exc}", err=True)
            sys.exit(2)

    if not prompt:
        click.echo("Error: provide a PROMPT or use --template", err=True)
        sys.exit(2)

    body: dict[str, object] = {"prompt": prompt, "deepResearch": deep}
    if max_results is not None:
        body["maxResults"] = max_results
    if template_id:
        body["templateId"] = template_id
    location = {k: v for k, v in (("city", city), ("state", state), ("region", region)) if v}
    if location:
        body["location"] = location
    if focus_areas:
        body["focusAreas"] = list(focus_areas)

    result = _run_discovery(settings, body)

    if as_json:
        click.echo(json.dumps(result.to_wire(), indent=2))
    else:
        _print_result(result)
    if not result.success:
        sys.exit(1)


@cli.command()
@click.option("--category", type=str, default=None, help="Only list one category")
def templates(category: str | None) -> None:
    """List discovery templates."""
    categories = [c for c in get_categories() if category is None or c.value == category]
    if not categories:
        click.echo(f"No templates in category '{category}'.")
        return
    for cat in categories:
        click.echo(f"{CATEGORY_LABELS[cat]}:")
        for template in get_templates_by_category(cat):
            keys = " ".join(p.key for p in template.placeholders)
            click.echo(f"  {template.id:28s} {template.title} {keys}")


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Check whether the search provider is usable."""
    settings = ctx.obj["settings"]
    provider_status = _build_provider(settings).status()
    if provider_status.available:
        click.echo("  Linkup           OK")
        return
    for reason in provider_status.reasons:
        click.echo(f"  Linkup           -- {reason}")
    sys.exit(1)


def main() -> None:
    cli(obj={})
