"""Structured logging configuration using structlog.

- JSON output for production (machine-parseable)
- Console output for development (human-readable)
- Context variable binding so every log line of a request carries its
  conversation id
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import Iterator

    from virtual_patient.config import LoggingSettings


def setup_logging(settings: LoggingSettings | None = None) -> None:
    """Configure structured logging for the application.

    Args:
        settings: Logging settings. If None, uses defaults from config.
    """
    if settings is None:
        from virtual_patient.config import get_settings  # noqa: PLC0415

        settings = get_settings().logging

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]

    if settings.include_timestamp:
        shared_processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))

    shared_processors.append(structlog.processors.StackInfoRenderer())

    if settings.include_caller:
        shared_processors.append(
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.LINENO,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                ]
            )
        )

    if settings.format == "json":
        final_processors: list[structlog.types.Processor] = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        final_processors = [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]

    structlog.configure(
        processors=shared_processors + final_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.level),
        force=True,
    )

    # Request logs from the HTTP client are noise next to our own completion logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (usually __name__).

    Returns:
        Configured structlog logger.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


def bind_context(**kwargs: str | int | float | bool) -> None:
    """Bind context variables for the current thread/coroutine."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Unbind context variables."""
    structlog.contextvars.unbind_contextvars(*keys)


@contextmanager
def logging_context(**context_vars: str | int | float | bool) -> Iterator[None]:
    """Bind context variables for the duration of a ``with`` block.

    Context is removed on exit, even if an exception is raised.
    """
    bind_context(**context_vars)
    try:
        yield
    finally:
        unbind_context(*context_vars.keys())
