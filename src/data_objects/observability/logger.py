"""Structured logging setup.

Uses structlog for structured logging over the stdlib ``logging``
backend.  Library modules log through ``logging.getLogger(__name__)``;
applications call :func:`setup_logging` once to pick a renderer.  The
root handler formats stdlib records and structlog events with the same
processor chain, so both come out as JSON or console lines.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from data_objects.core.config import ObservabilityConfig

HANDLER_NAME = "data_objects"


def _add_component(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: tag every entry with the package name."""
    event_dict.setdefault("component", "data_objects")
    return event_dict


def _shared_processors() -> list[Any]:
    """Processors applied to structlog events and stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        _add_component,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def setup_logging(
    level: str = "INFO",
    format: str = "console",
) -> None:
    """Configure structured logging.

    Installs (or replaces) one root handler named ``HANDLER_NAME``.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        format: "json" for machine-readable output, "console" for development.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    renderer: Any
    if format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level)


def setup_logging_from_config(config: ObservabilityConfig) -> None:
    """Configure logging from an :class:`ObservabilityConfig`."""
    setup_logging(level=config.log_level, format=config.log_format)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for a module."""
    return structlog.get_logger(name)
