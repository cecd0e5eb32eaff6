"""
Service Helpers

Paging container and the guards every mutating operation runs first.

Guard Order:
============
    resource = await repo.get(id)
    require_found(resource, "Note", id)       → 404 if absent
    require_owner(resource.user_id, user)     → 403 if not the caller's

Existence is always checked first, so "does not exist" and "not yours"
stay distinguishable regardless of who asks.
"""

from dataclasses import dataclass
import math
from typing import Generic, Optional, TypeVar
from uuid import UUID

from studyhub.config.settings import settings
from studyhub.shared.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from studyhub.shared.models import ContentType, User


T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of results plus the total across all pages."""

    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def page_window(page: int, limit: Optional[int] = None) -> tuple[int, int]:
    """Translate (page, limit) into (offset, limit), clamped to settings."""
    limit = limit or settings.DEFAULT_PAGE_SIZE
    limit = max(1, min(limit, settings.MAX_PAGE_SIZE))
    page = max(1, page)
    return (page - 1) * limit, limit


def require_found(resource: Optional[T], name: str, resource_id: Optional[UUID] = None) -> T:
    if resource is None:
        raise NotFoundError(name, resource_id)
    return resource


def require_owner(owner_id: UUID, user: User, message: Optional[str] = None) -> None:
    if owner_id != user.id:
        raise AuthorizationError(message or "You are not authorized to perform this action")


VOTABLE_TYPES = (ContentType.NOTE, ContentType.QUESTION)


def parse_content_type(
    value: "ContentType | str",
    allowed: tuple[ContentType, ...] = VOTABLE_TYPES,
) -> ContentType:
    """Coerce a discriminator, rejecting kinds the operation does not support."""
    try:
        content_type = ContentType(value)
    except ValueError:
        raise ValidationError(f"Invalid content type: {value}")
    if content_type not in allowed:
        raise ValidationError(f"Invalid content type: {content_type.value}")
    return content_type


RESOURCE_NAMES = {
    ContentType.NOTE: "Note",
    ContentType.QUESTION: "Question",
    ContentType.COMMENT: "Comment",
}
