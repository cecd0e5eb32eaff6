"""
Bookmark Entity Model

A user's saved reference to a note or a question.

Same uniqueness shape as votes: one bookmark per (user, item), enforced by
UNIQUE (user_id, note_id) and UNIQUE (user_id, question_id).
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studyhub.shared.models.base import Base, TimestampMixin
from studyhub.shared.models.content import ContentTargetMixin, single_target_check


if TYPE_CHECKING:
    from studyhub.shared.models.note import Note
    from studyhub.shared.models.question import Question


class Bookmark(Base, ContentTargetMixin, TimestampMixin):
    __tablename__ = "bookmarks"

    __table_args__ = (
        single_target_check("bookmarks"),
        UniqueConstraint("user_id", "note_id", name="uq_bookmarks_user_note"),
        UniqueConstraint("user_id", "question_id", name="uq_bookmarks_user_question"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Loaded for the "my bookmarks" listing
    note: Mapped[Optional["Note"]] = relationship("Note", lazy="selectin")
    question: Mapped[Optional["Question"]] = relationship("Question", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Bookmark(user_id={self.user_id}, target={self.target_id})>"
