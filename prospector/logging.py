"""structlog setup shared by the API server and the CLI.

Everything is written to stderr so ``prospector discover --json`` keeps
stdout clean for the result payload.
"""

from __future__ import annotations

import logging
import sys

import structlog

# httpx logs one INFO line per Linkup request; discovery already logs the batch.
_NOISY_LOGGERS = ("httpx", "httpcore")


def _level_number(log_level: str) -> int:
    level = logging.getLevelName(log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def _processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(log_level: str = "INFO", log_format: str = "console") -> None:
    """Set up structlog and send stdlib records (uvicorn, httpx) through the same renderer.

    Unknown level names fall back to INFO. ``log_format`` is "json" or
    anything else for the console renderer.
    """
    level = _level_number(log_level)
    renderer = _renderer(log_format)

    structlog.configure(
        processors=[*_processors(), renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_processors(),
                renderer,
            ],
        )
    )
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
