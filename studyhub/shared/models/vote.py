"""
Vote Entity Model

One user's up/down vote on a note or a question.

Uniqueness:
===========
A user holds at most one vote per item. This is enforced by the database
with one unique constraint per target column, so two concurrent "first
votes" from the same user cannot both be inserted:

    UNIQUE (user_id, note_id)
    UNIQUE (user_id, question_id)

NULLs never collide in a unique constraint, so a note vote and a question
vote from the same user do not conflict with each other.
"""

import uuid

from sqlalchemy import ForeignKey, UniqueConstraint, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from studyhub.shared.models.base import Base, TimestampMixin
from studyhub.shared.models.content import ContentTargetMixin, single_target_check
from studyhub.shared.models.enums import VoteType


class Vote(Base, ContentTargetMixin, TimestampMixin):
    """Vote model. The vote table is the source of truth for tallies."""

    __tablename__ = "votes"

    __table_args__ = (
        single_target_check("votes"),
        UniqueConstraint("user_id", "note_id", name="uq_votes_user_note"),
        UniqueConstraint("user_id", "question_id", name="uq_votes_user_question"),
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

    vote_type: Mapped[VoteType] = mapped_column(
        SQLEnum(VoteType),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Vote(user_id={self.user_id}, target={self.target_id}, type={self.vote_type.value})>"
