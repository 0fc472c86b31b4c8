"""Structured logging configuration using structlog.

Provides context variables naming the codec and operation a log event was
emitted under, and configurable output formats (JSON for production,
colored console for dev). The public codec entry points bind both values
through ``codec_context``.
"""

import logging
import sys
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, cast

import structlog
from structlog.types import Processor

from geocodec.config import settings

# Context variables attached to every codec log event
_codec: ContextVar[str | None] = ContextVar("codec", default=None)
_operation: ContextVar[str | None] = ContextVar("operation", default=None)


@contextmanager
def codec_context(codec: str, operation: str) -> Iterator[None]:
    """Bind the codec and operation for log events emitted inside the block.

    The previous values are restored on exit, so nested entry points (for
    example ``wkb.encode`` calling ``wkb.encode_chunks``) leave the outer
    binding intact. Also usable as a decorator.

    Args:
        codec: Codec name ("geojson", "wkb" or "wkt").
        operation: "decode" or "encode".
    """
    codec_token = _codec.set(codec)
    operation_token = _operation.set(operation)
    try:
        yield
    finally:
        _operation.reset(operation_token)
        _codec.reset(codec_token)


def get_log_context() -> dict[str, str]:
    """Return the bound context values, omitting unset ones."""
    context = {"codec": _codec.get(), "operation": _operation.get()}
    return {key: value for key, value in context.items() if value is not None}


def clear_log_context() -> None:
    """Clear all log context variables."""
    _codec.set(None)
    _operation.set(None)


def _add_log_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Structlog processor to add the log context to log events."""
    _ = logger, method_name  # Required by structlog processor signature
    event_dict.update(get_log_context())
    return event_dict


def configure_logging(
    level: str | None = None,
    log_format: str | None = None,
) -> None:
    """Configure structlog with the specified settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to settings.LOG_LEVEL.
        log_format: Output format ("console" or "json").
                    Defaults to settings.LOG_FORMAT.
    """
    level = level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_log_context,
    ]

    if log_format == "json":
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Configure stdlib logging to match
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
        force=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name. If None, uses the calling module's name.

    Returns:
        A bound structlog logger instance.
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
