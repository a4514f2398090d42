"""Logging infrastructure for the Freelo MCP server.

Provides structured logging with configurable levels and per-invocation
request tracking. Everything goes to stderr: stdout carries the MCP stdio
protocol.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from typing import Any

# Request ID tracking for per-invocation correlation
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    """Get the current request ID if available."""
    return request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """Guarantee every record carries a ``request_id`` attribute."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = get_request_id() or "-"
        return True


def setup_logging(
    level: int | str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """Configure logging for the application.

    Args:
        level: Logging level (e.g., 'DEBUG', 'INFO', 'ERROR').
               Defaults to LOGGING_LEVEL env var or 'INFO'.
        format_string: Custom log format string. Defaults to a structured format.

    Returns:
        The root logger configured for the application.
    """
    if level is None:
        level = os.environ.get("LOGGING_LEVEL", "INFO")

    if format_string is None:
        format_string = (
            "%(asctime)s [%(levelname)s] [%(name)s] [request=%(request_id)s] %(message)s"
        )

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(format_string))
    console_handler.addFilter(RequestIdFilter())
    logger.addHandler(console_handler)

    # Disable noisy third-party loggers
    logging.getLogger("httpx").setLevel("WARNING")
    logging.getLogger("httpx").propagate = False
    logging.getLogger("asyncio").setLevel("WARNING")
    logging.getLogger("asyncio").propagate = False

    return logger


class RequestLoggerAdapter(logging.LoggerAdapter[Any]):
    """Logger adapter that automatically adds request ID to log records."""

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        """Process the log record and add request context."""
        extra = kwargs.get("extra")
        if extra is None:
            extra = {}
        request_id = get_request_id()
        if request_id is not None:
            extra["request_id"] = request_id
        kwargs["extra"] = extra
        return msg, kwargs


def create_logger(name: str) -> RequestLoggerAdapter:
    """Create and return a logger for a module.

    Args:
        name: The module name (typically __name__).

    Returns:
        A configured logger with request context support.
    """
    return RequestLoggerAdapter(logging.getLogger(name), {})
