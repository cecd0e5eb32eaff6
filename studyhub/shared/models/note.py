"""
Note Entity Model

Study notes shared by students: text content with an optional attached file.

SAMPLE NOTE RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ user_id          │ 660e8400-e29b-41d4-a716-446655440000                      │
│ title            │ "Constitution of Nepal: Part 3 summary"                   │
│ file_type        │ "pdf"                                                     │
│ is_approved      │ true                                                      │
│ upvotes          │ 12                                                        │
│ downvotes        │ 1                                                         │
│ view_count       │ 340                                                       │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studyhub.shared.models.base import Base, TimestampMixin
from studyhub.shared.models.content import ContentItemMixin
from studyhub.shared.models.tag import note_tags


if TYPE_CHECKING:
    from studyhub.shared.models.tag import Tag


class Note(Base, ContentItemMixin, TimestampMixin):
    """Study note. See ContentItemMixin for the shared columns."""

    __tablename__ = "notes"

    __table_args__ = (
        # Approved feed sorted by date
        Index("ix_notes_is_approved_created_at", "is_approved", "created_at"),
    )

    file_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    tags: Mapped[list["Tag"]] = relationship(
        "Tag",
        secondary=note_tags,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"
