"""
Question Entity Model

Past exam questions (optionally tagged with the exam year).
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Index, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studyhub.shared.models.base import Base, TimestampMixin
from studyhub.shared.models.content import ContentItemMixin
from studyhub.shared.models.tag import question_tags


if TYPE_CHECKING:
    from studyhub.shared.models.tag import Tag


class Question(Base, ContentItemMixin, TimestampMixin):
    """Past exam question. See ContentItemMixin for the shared columns."""

    __tablename__ = "questions"

    __table_args__ = (
        Index("ix_questions_is_approved_created_at", "is_approved", "created_at"),
    )

    year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)

    tags: Mapped[list["Tag"]] = relationship(
        "Tag",
        secondary=question_tags,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Question(id={self.id}, title={self.title!r}, year={self.year})>"
