"""
Content Target Helpers

Votes, bookmarks and comments point at either a note or a question through
two nullable foreign keys. These helpers translate a ContentType
discriminator into the right column so callers never branch on it.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import ColumnElement

from studyhub.shared.models import ContentType


TARGETABLE_TYPES = (ContentType.NOTE, ContentType.QUESTION)


def target_column(model: Any, content_type: ContentType) -> Any:
    """``Vote.note_id`` for NOTE, ``Vote.question_id`` for QUESTION, etc."""
    if content_type not in TARGETABLE_TYPES:
        raise ValueError(f"{content_type.value} cannot be targeted")
    return getattr(model, f"{content_type.value}_id")


def target_clause(model: Any, content_type: ContentType, content_id: UUID) -> ColumnElement[bool]:
    return target_column(model, content_type) == content_id


def target_values(content_type: ContentType, content_id: UUID) -> dict[str, UUID]:
    """Constructor kwargs setting the single target foreign key."""
    if content_type not in TARGETABLE_TYPES:
        raise ValueError(f"{content_type.value} cannot be targeted")
    return {f"{content_type.value}_id": content_id}
