"""
Logging Configuration

Structured logging for StudyHub built on structlog.

Log Output:
===========
Development:
    2024-01-15 10:30:00 [info     ] Vote cast    action=added note_id=550e8400-... user_id=...

Production (JSON):
    {"timestamp": "2024-01-15T10:30:00", "level": "info", "event": "Vote cast", "action": "added"}

Usage:
======
    from studyhub.shared.core.logging import logger, get_logger, log_context

    logger.info("Report created", report_id=report.id, content_type="note")

    chat_logger = get_logger("studyhub.chat")
    chat_logger.debug("Message edited", message_id=message_id)

    # Bind values to every log line emitted for the rest of the request
    log_context(request_id=request_id, user_id=user_id)
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import Processor

from studyhub.config.settings import settings


def setup_logging() -> None:
    """
    Configure structlog and the stdlib root logger.

    Development gets a colored console renderer, every other environment
    gets one JSON object per line.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper()),
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.is_development:
        processors: list[Processor] = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]
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


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name, e.g. "studyhub.votes"

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> None:
    """
    Bind key-value pairs to all subsequent log calls in this context.

    Values live in contextvars, so each request keeps its own context.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    """Drop everything bound with log_context()."""
    structlog.contextvars.clear_contextvars()


setup_logging()

logger = get_logger("studyhub")
