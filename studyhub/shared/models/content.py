"""
Content Item Mixin

Columns and relationships shared by the two moderated, votable content
models: Note and Question.

Lifecycle:
==========
    created by owner ──► is_approved = not CONTENT_REQUIRES_APPROVAL
          │
          ├── owner edits title/content/tags
          ├── moderator flips is_approved
          ├── votes recompute upvotes/downvotes (cached projection of vote rows)
          └── owner deletes ──► comments, votes, bookmarks removed with it

Vote Tallies:
=============
The Vote table is the source of truth. ``upvotes`` and ``downvotes`` are a
projection recomputed inside every vote transaction, kept on the row so
listings can sort by popularity without aggregating.
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, declared_attr, mapped_column, relationship


if TYPE_CHECKING:
    from studyhub.shared.models.user import User
    from studyhub.shared.models.category import Category


class ContentItemMixin:
    """Shared columns for Note and Question."""

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # Owner
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    category_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(300), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    file_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Moderation
    is_approved: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        index=True,
    )

    # Engagement counters
    upvotes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    downvotes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    view_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Many-to-one relationships are loaded eagerly with "selectin" so they are
    # populated by the same await that loads (or refreshes) the row.
    @declared_attr
    def author(cls) -> Mapped["User"]:
        return relationship("User", lazy="selectin")

    @declared_attr
    def category(cls) -> Mapped[Optional["Category"]]:
        return relationship("Category", lazy="selectin")

    @property
    def tag_names(self) -> list[str]:
        return sorted(tag.name for tag in self.tags)


class ContentTargetMixin:
    """
    Polymorphic reference to a Note or a Question.

    Exactly one of ``note_id`` / ``question_id`` is set; each model using
    this mixin enforces that with a CHECK constraint built by
    ``single_target_check``. Rows are removed together with their target.
    """

    note_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("notes.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    question_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    @property
    def target_id(self) -> uuid.UUID:
        return self.note_id if self.note_id is not None else self.question_id


def single_target_check(table_name: str) -> CheckConstraint:
    return CheckConstraint(
        "(note_id IS NULL) <> (question_id IS NULL)",
        name=f"ck_{table_name}_single_target",
    )
