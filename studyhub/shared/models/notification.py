"""
Notification Entity Model

An in-app notification addressed to one user.

SAMPLE NOTIFICATION RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ user_id          │ 660e8400-e29b-41d4-a716-446655440000                      │
│ title            │ "New Group Member"                                        │
│ message          │ "Asha Karki joined Loksewa Prep"                          │
│ type             │ info                                                      │
│ data             │ {"group_id": "...", "user_id": "..."}                     │
│ is_read          │ false                                                     │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import Any, Optional
import uuid

from sqlalchemy import Boolean, ForeignKey, Index, String, Text, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from studyhub.shared.models.base import Base, TimestampMixin
from studyhub.shared.models.enums import NotificationType


class Notification(Base, TimestampMixin):
    __tablename__ = "notifications"

    __table_args__ = (
        # Unread badge count
        Index("ix_notifications_user_is_read", "user_id", "is_read"),
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

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)

    type: Mapped[NotificationType] = mapped_column(
        SQLEnum(NotificationType),
        default=NotificationType.INFO,
        nullable=False,
    )

    # Free-form payload for deep links (ids of the related group, note, ...)
    data: Mapped[Optional[dict[str, Any]]] = mapped_column(nullable=True)

    is_read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<Notification(id={self.id}, user_id={self.user_id}, title={self.title!r})>"
