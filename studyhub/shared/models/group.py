"""
Group and GroupMember Entity Models

Study groups with role-based membership.

Membership Rules:
=================
- The creator joins as ADMIN
- Anyone may join a PUBLIC group; PRIVATE groups need an admin to add them
- A user is a member of a group at most once (unique group_id, user_id)
- The last member leaving deletes the group
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import DateTime, ForeignKey, String, Text, UniqueConstraint, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studyhub.shared.models.base import Base, TimestampMixin, utcnow
from studyhub.shared.models.enums import GroupRole, GroupType


if TYPE_CHECKING:
    from studyhub.shared.models.user import User


class Group(Base, TimestampMixin):
    """
    Study group.

    Attributes:
        id: Unique identifier (UUID v4)
        name: Display name
        description: Optional description
        group_type: PUBLIC or PRIVATE
        avatar: Optional avatar URL
        category: Optional subject label
        created_by: User who created the group
    """

    __tablename__ = "groups"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(150), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    group_type: Mapped[GroupType] = mapped_column(
        SQLEnum(GroupType),
        default=GroupType.PUBLIC,
        nullable=False,
    )

    category: Mapped[Optional[str]] = mapped_column(String(120), nullable=True, index=True)
    avatar: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_by: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    creator: Mapped["User"] = relationship("User", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Group(id={self.id}, name={self.name})>"


class GroupMember(Base):
    """A user's membership in a group."""

    __tablename__ = "group_members"

    __table_args__ = (
        UniqueConstraint("group_id", "user_id", name="uq_group_members_group_user"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    group_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    role: Mapped[GroupRole] = mapped_column(
        SQLEnum(GroupRole),
        default=GroupRole.MEMBER,
        nullable=False,
    )

    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    user: Mapped["User"] = relationship("User", lazy="selectin")

    def __repr__(self) -> str:
        return f"<GroupMember(group_id={self.group_id}, user_id={self.user_id}, role={self.role.value})>"
