"""Structured logging configuration.

Adapter components never log through a module-level logger: each one
takes an optional ``logger`` argument and stays silent without it. The
helpers here build the loggers a caller injects.

SQL text is logged under the ``sql`` key. Migration scripts can be very
long, so statements are cut to ``max_statement_length`` characters by
the ``truncate_statements`` processor.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger


DEFAULT_MAX_STATEMENT_LENGTH = 500

_STATEMENT_KEYS = ("sql",)


def truncate_statements(max_length: int = DEFAULT_MAX_STATEMENT_LENGTH) -> Processor:
    """
    Build a processor that shortens long SQL text in log events.

    Args:
        max_length: Characters kept per statement. 0 disables truncation.

    Returns:
        A structlog processor

    Example:
        >>> processor = truncate_statements(10)
        >>> processor(None, "query_raw", {"sql": "SELECT * FROM users"})
        {'sql': 'SELECT * F... (19 chars)'}
    """

    def processor(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        if max_length <= 0:
            return event_dict
        for key in _STATEMENT_KEYS:
            value = event_dict.get(key)
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = f"{value[:max_length]}... ({len(value)} chars)"
        return event_dict

    return processor


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
    max_statement_length: int = DEFAULT_MAX_STATEMENT_LENGTH,
) -> None:
    """
    Set up structured logging with structlog.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format ('json' or 'console')
        max_statement_length: Characters of SQL text kept per event
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        truncate_statements(max_statement_length),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """
    Get a bound logger instance.

    Args:
        name: Logger name (module name typically)
        **initial_context: Initial context to bind to the logger, such as
            ``adapter="sqlite-driver-adapter"``

    Returns:
        A bound structlog logger
    """
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger


def get_null_logger() -> structlog.BoundLogger:
    """
    Get a logger that discards every event.

    Returns:
        A bound structlog logger writing nowhere
    """
    return structlog.wrap_logger(
        structlog.ReturnLogger(),
        processors=[structlog.processors.KeyValueRenderer()],
    )
