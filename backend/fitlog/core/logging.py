"""
Structured logging configuration.
Designed for easy debugging without exposing sensitive data.
"""
import logging
import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Generator, Optional

import structlog
from structlog.types import Processor

from fitlog.core.config import settings


def setup_logging() -> None:
    """Configure structured logging for the application."""

    # Common processors
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.LOG_FORMAT == "json":
        # JSON format for production
        renderer = structlog.processors.JSONRenderer()
    else:
        # Console format for development
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure root logger
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper()))

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def log_remote_call(
    logger: structlog.stdlib.BoundLogger,
    table: str,
    operation: str,
    duration_ms: float,
    **extra: Any
) -> None:
    """
    Log a completed remote table call.
    NEVER logs row payloads, tokens or API keys.
    """
    logger.debug(
        "Remote call completed",
        table=table,
        operation=operation,
        duration_ms=round(duration_ms, 2),
        **extra
    )


def log_remote_error(
    logger: structlog.stdlib.BoundLogger,
    table: str,
    operation: str,
    error_type: str,
    error_message: str,
    **extra: Any
) -> None:
    """
    Log a failed remote table call.
    Logs error details but NEVER tokens or API keys.
    """
    logger.warning(
        "Remote call failed",
        table=table,
        operation=operation,
        error_type=error_type,
        error_message=error_message,
        **extra
    )


@dataclass
class RemoteCallLog:
    """Outcome of a single remote call."""
    table: str
    operation: str
    start_time: float = 0.0
    duration_ms: float = 0.0
    success: bool = True
    error_type: Optional[str] = None
    error_message: Optional[str] = None


@contextmanager
def track_remote_call(
    logger: structlog.stdlib.BoundLogger,
    table: str,
    operation: str,
    **extra: Any
) -> Generator[RemoteCallLog, None, None]:
    """
    Time a remote call and log its outcome.

    Usage:
        with track_remote_call(logger, "exercises", "insert", user_id=uid):
            response = await client.post(...)

    Exceptions are logged and re-raised unchanged.
    """
    call = RemoteCallLog(table=table, operation=operation, start_time=time.time())
    try:
        yield call
    except Exception as e:
        call.success = False
        call.error_type = type(e).__name__
        call.error_message = str(e)
        raise
    finally:
        call.duration_ms = (time.time() - call.start_time) * 1000
        if call.success:
            log_remote_call(logger, table, operation, call.duration_ms, **extra)
        else:
            log_remote_error(
                logger,
                table,
                operation,
                call.error_type or "unknown",
                call.error_message or "",
                duration_ms=round(call.duration_ms, 2),
                **extra
            )
