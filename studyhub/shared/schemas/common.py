"""
Common Schemas

Shared schemas used across the application for consistent API responses.

Response Envelope:
==================
Every endpoint answers with the same wrapper:

    {
        "success": true,
        "message": "Note created successfully",
        "data": { ... }
    }

Errors use the same shape with ``success: false`` plus ``error`` (a
machine-readable code) and optional ``details``.

Paginated endpoints put a PaginatedData object in ``data``:

    "data": {
        "items": [ ... ],
        "pagination": {"page": 1, "limit": 10, "total": 42, "total_pages": 5}
    }

Usage:
======
    from studyhub.shared.schemas.common import ApiResponse, PaginatedData

    return ApiResponse(message="Notes retrieved", data=PaginatedData.from_page(page, NoteResponse))
"""

from datetime import datetime, timezone
from typing import Any, Callable, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from studyhub.shared.services.common import Page


# Generic type for enveloped / paginated payloads
DataT = TypeVar("DataT")


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    - from_attributes: Allow creating from ORM models
    - populate_by_name: Allow field population by name or alias
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# ENVELOPE
# ═══════════════════════════════════════════════════════════════════════════════


class ApiResponse(BaseModel, Generic[DataT]):
    """Success envelope."""

    success: bool = True
    message: str
    data: Optional[DataT] = None


class ErrorResponse(BaseModel):
    """
    Error envelope.

    Example:
        {
            "success": false,
            "message": "Note not found",
            "error": "NOT_FOUND",
            "details": {"id": "550e8400-..."}
        }
    """

    success: bool = False
    message: str
    error: str = Field(description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(
        default=None,
        description="Additional error context",
    )


# ═══════════════════════════════════════════════════════════════════════════════
# PAGINATION
# ═══════════════════════════════════════════════════════════════════════════════


class PaginationMeta(BaseModel):
    """Pagination metadata in response."""

    page: int = Field(description="Current page number")
    limit: int = Field(description="Items per page")
    total: int = Field(description="Total number of items")
    total_pages: int = Field(description="Total number of pages")


class PaginatedData(BaseModel, Generic[DataT]):
    """
    Generic page of items.

    Example:
        PaginatedData[NoteResponse].from_page(page, NoteResponse.model_validate)
    """

    items: list[DataT]
    pagination: PaginationMeta

    @classmethod
    def from_page(cls, page: Page, convert: Callable[[Any], DataT]) -> "PaginatedData[DataT]":
        return cls(
            items=[convert(item) for item in page.items],
            pagination=PaginationMeta(
                page=page.page,
                limit=page.limit,
                total=page.total,
                total_pages=page.total_pages,
            ),
        )


class CountResponse(BaseModel):
    count: int


# ═══════════════════════════════════════════════════════════════════════════════
# HEALTH CHECK
# ═══════════════════════════════════════════════════════════════════════════════


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = "healthy"
    service: str = "studyhub"
    version: str = "1.0.0"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
