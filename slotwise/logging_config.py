"""
Structured logging for slotwise entry points (structlog over stdlib).

Library modules log through logging.getLogger(__name__); this module only
decides how those records are rendered. Console output by default, JSON when
SLOTWISE_LOG_FORMAT=json.

Usage:
    from slotwise.logging_config import setup_logging
    setup_logging()
"""

from __future__ import annotations

import logging
import os
import sys

import structlog


# Third-party loggers that are too chatty at INFO for a CLI run
NOISY_LOGGERS = ("aiohttp", "asyncio", "urllib3")


def _resolve_level(level: str | None) -> int:
    if level is None:
        level = os.environ.get("SLOTWISE_LOG_LEVEL", "INFO")
    return getattr(logging, level.upper(), logging.INFO)


def setup_logging(
    level: str | None = None,
    json_output: bool | None = None,
    quiet_libraries: bool = True,
) -> None:
    """Route stdlib logging through structlog's formatter on stderr."""
    numeric_level = _resolve_level(level)

    if json_output is None:
        json_output = os.environ.get("SLOTWISE_LOG_FORMAT", "").lower() == "json"

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(numeric_level)

    if quiet_libraries:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))


def get_logger(name: str | None = None, **context) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger(name)
    if context:
        logger = logger.bind(**context)
    return logger


__all__ = ["NOISY_LOGGERS", "get_logger", "setup_logging"]
