"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions

Usage:
======
    from studyhub.shared.core.logging import logger, get_logger
    from studyhub.shared.core.exceptions import StudyHubException, NotFoundError

    logger.info("Starting operation", user_id=user_id)
"""

from studyhub.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from studyhub.shared.core.exceptions import (
    StudyHubException,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
    BusinessRuleError,
    DuplicateResourceError,
    ConflictError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "StudyHubException",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ValidationError",
    "BusinessRuleError",
    "DuplicateResourceError",
    "ConflictError",
]
