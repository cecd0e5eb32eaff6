"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

Exception Hierarchy:
====================
    StudyHubException (base)
       │
       ├── AuthenticationError (401)    ← Missing/invalid/expired credentials
       ├── AuthorizationError (403)     ← Caller does not own the resource,
       │                                  or lacks the moderator/admin role
       ├── NotFoundError (404)          ← Resource absent (always checked first)
       ├── ValidationError (400)        ← Malformed input (bad vote type, ...)
       ├── BusinessRuleError (400)      ← Rule violation (already reported, ...)
       │      └── DuplicateResourceError
       └── ConflictError (409)          ← Unexpected uniqueness conflict in the store

Usage:
======
    from studyhub.shared.core.exceptions import NotFoundError, AuthorizationError

    raise NotFoundError("Note", note_id)
    # {"success": false, "message": "Note not found", "error": "NOT_FOUND"}

    raise AuthorizationError("You are not authorized to update this note")

Exception Handling:
===================
    Exceptions are caught by the error handler middleware and rendered into the
    response envelope:
    {
        "success": false,
        "message": "You have already reported this content",
        "error": "BUSINESS_RULE_VIOLATION"
    }
"""

from typing import Any, Optional


class StudyHubException(Exception):
    """
    Base exception for all StudyHub application errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Render the exception as an error envelope.

        Returns:
            Dictionary for the JSON response body
        """
        body: dict[str, Any] = {
            "success": False,
            "message": self.message,
            "error": self.error_code,
        }
        if self.details:
            body["details"] = self.details
        return body


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHENTICATION & AUTHORIZATION ERRORS (401, 403)
# ═══════════════════════════════════════════════════════════════════════════════


class AuthenticationError(StudyHubException):
    """
    Authentication failed error (401 Unauthorized).

    Raised when:
    - No bearer token was supplied
    - Token is expired or malformed
    - Login credentials are wrong
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTHENTICATION_ERROR",
            details=details,
        )


class AuthorizationError(StudyHubException):
    """
    Caller lacks rights over an existing resource (403 Forbidden).

    Only raised after the resource was found, so "not yours" is never
    confused with "does not exist".
    """

    def __init__(
        self,
        message: str = "You are not authorized to perform this action",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=403,
            error_code="UNAUTHORIZED",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(StudyHubException):
    """
    Resource not found error (404 Not Found).

    Example:
        raise NotFoundError("Note")
        # Message: "Note not found"
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        extra = dict(details or {})
        if resource_id is not None:
            extra.setdefault("id", str(resource_id))
        super().__init__(
            message=f"{resource} not found",
            status_code=404,
            error_code="NOT_FOUND",
            details=extra,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION & BUSINESS RULE ERRORS (400, 409)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(StudyHubException):
    """
    Invalid argument (400 Bad Request).

    Raised when input is malformed: an unknown vote type, an unknown content
    type discriminator, a file that is too large.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=details,
        )


class BusinessRuleError(StudyHubException):
    """
    Well-formed request that breaks a rule (400 Bad Request).

    Example:
        raise BusinessRuleError("You have already reported this content")
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code="BUSINESS_RULE_VIOLATION",
            details=details,
        )


class DuplicateResourceError(BusinessRuleError):
    """Creating something that already exists (email, category name, membership)."""

    def __init__(
        self,
        message: str = "Resource already exists",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)
        self.error_code = "DUPLICATE_RESOURCE"


class ConflictError(StudyHubException):
    """
    Store-level conflict (409 Conflict).

    Used for uniqueness violations that no service anticipated.
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details=details,
        )
