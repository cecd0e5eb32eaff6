"""
Comment Entity Model

A user's comment on a note or a question.
"""

from typing import TYPE_CHECKING
import uuid

from sqlalchemy import ForeignKey, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studyhub.shared.models.base import Base, TimestampMixin
from studyhub.shared.models.content import ContentTargetMixin, single_target_check


if TYPE_CHECKING:
    from studyhub.shared.models.user import User


class Comment(Base, ContentTargetMixin, TimestampMixin):
    """
    Comment model.

    Attributes:
        id: Unique identifier (UUID v4)
        user_id: Author of the comment
        note_id / question_id: The commented item (exactly one is set)
        content: Comment body
    """

    __tablename__ = "comments"

    __table_args__ = (single_target_check("comments"),)

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

    content: Mapped[str] = mapped_column(Text, nullable=False)

    author: Mapped["User"] = relationship("User", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, user_id={self.user_id})>"
