"""
Error Handler Middleware

Global exception handling for the API.

Every failure leaves the API in the same envelope the success path uses,
so clients only ever parse one shape.

Error Response Format:
======================
    {
        "success": false,
        "message": "Note not found",
        "error": "NOT_FOUND",
        "details": {"id": "550e8400-..."}
    }

Exception Handling:
===================
1. StudyHubException subclasses → their status_code and to_dict()
2. Request validation errors   → 400 VALIDATION_ERROR with the field errors
3. IntegrityError              → 409 CONFLICT (a uniqueness race no service caught)
4. Other exceptions            → 500 with a generic message (details hidden)

Usage:
======
    from studyhub.api.middleware.error_handler import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from studyhub.shared.core.exceptions import StudyHubException
from studyhub.shared.core.logging import logger


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Set up global exception handlers.

    Should be called during application initialization to register
    exception handlers for all routes.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(StudyHubException)
    async def studyhub_exception_handler(
        request: Request,
        exc: StudyHubException,
    ) -> JSONResponse:
        """
        Handle StudyHub-specific exceptions.

        All custom exceptions inherit from StudyHubException and include:
        - status_code: HTTP status code
        - error_code: Machine-readable error code
        - message: Human-readable message
        - details: Additional context
        """
        logger.warning(
            "Application error",
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
        )

    @app.exception_handler(RequestValidationError)
    @app.exception_handler(ValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError | ValidationError,
    ) -> JSONResponse:
        """
        Handle request and Pydantic validation errors.

        These occur when the body, path or query doesn't match the
        expected schema.
        """
        errors = jsonable_encoder(exc.errors(), exclude={"ctx", "input", "url"})
        logger.warning(
            "Validation error",
            errors=errors,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "message": "Request validation failed",
                "error": "VALIDATION_ERROR",
                "details": {"errors": errors},
            },
        )

    @app.exception_handler(IntegrityError)
    async def integrity_exception_handler(
        request: Request,
        exc: IntegrityError,
    ) -> JSONResponse:
        logger.warning(
            "Integrity error",
            error=str(exc.orig),
            path=request.url.path,
        )
        return JSONResponse(
            status_code=409,
            content={
                "success": False,
                "message": "Resource already exists",
                "error": "CONFLICT",
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Handle unexpected exceptions.

        Catches any unhandled exception and returns a generic error.
        Full error details are logged but not exposed to clients.
        """
        logger.error(
            "Unexpected error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": "An unexpected error occurred",
                "error": "INTERNAL_ERROR",
            },
        )
