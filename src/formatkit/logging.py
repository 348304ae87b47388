"""
Structured logging setup for formatkit.

Configures structlog for JSON-formatted structured logging. Every log
line includes timestamp, level, service name, and event. Per-call
context (msisdn, collection) is bound at the call site.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from formatkit.config import get_settings


def _add_service(service_name: str) -> structlog.types.Processor:
    def processor(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def configure_logging(
    level: str | None = None,
    *,
    service_name: str = "formatkit",
    json_output: bool = True,
) -> None:
    """Configure structlog for the calling process.

    Args:
        level: Logging level name; falls back to ``Settings.log_level``.
        service_name: Value of the ``service`` key on every event.
        json_output: Render JSON lines; ``False`` uses the console renderer.
    """
    level_name = (level or get_settings().log_level).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        raise ValueError(f"unknown log level: {level_name}")

    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service(service_name),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )
