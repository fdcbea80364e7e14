"""Logging configuration using structlog."""

import logging
import sys

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

_configured_debug: bool | None = None


def setup_logging(debug: bool = False) -> None:
    """Configure structlog for structured logging.

    The first call wins: module loggers are cached on first use, so a later call
    asking for another mode only logs a warning.

    Args:
        debug: If True, use colored console output. If False, use JSON for production.
    """
    global _configured_debug
    if _configured_debug is not None:
        if debug != _configured_debug:
            structlog.get_logger(__name__).warning(
                "Logging already configured, ignoring new mode",
                debug=_configured_debug,
                requested_debug=debug,
            )
        return
    _configured_debug = debug

    log_level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    shared_processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # uvicorn's own access log duplicates the structured access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Optional logger name.

    Returns:
        A bound structlog logger.
    """
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None, **extra: str) -> None:
    """Bind request-level context to all subsequent log calls.

    Args:
        request_id: The correlation ID for the current request.
        **extra: Additional request attributes (method, path) to bind.
    """
    if request_id:
        bind_contextvars(request_id=request_id)
    if extra:
        bind_contextvars(**extra)


def clear_request_context() -> None:
    """Clear all request-scoped context."""
    clear_contextvars()
