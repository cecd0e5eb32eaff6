"""
GroupMessage Entity Model

A chat message posted in a study group.

Deleting a message is a soft delete: the row stays so the conversation
keeps its shape, ``is_deleted`` is set and the content is replaced with a
placeholder.
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import BigInteger, Boolean, ForeignKey, Index, Text, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studyhub.shared.models.base import Base, TimestampMixin
from studyhub.shared.models.enums import MessageType


if TYPE_CHECKING:
    from studyhub.shared.models.user import User


DELETED_MESSAGE_PLACEHOLDER = "This message was deleted"


class GroupMessage(Base, TimestampMixin):
    __tablename__ = "group_messages"

    __table_args__ = (
        # Chat history is always read per group by time
        Index("ix_group_messages_group_created_at", "group_id", "created_at"),
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
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)

    message_type: Mapped[MessageType] = mapped_column(
        SQLEnum(MessageType),
        default=MessageType.TEXT,
        nullable=False,
    )

    file_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    file_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    file_size: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)

    # Identifier only; the referenced message may since have been deleted
    reply_to_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)

    is_edited: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    sender: Mapped["User"] = relationship("User", lazy="selectin")

    def __repr__(self) -> str:
        return f"<GroupMessage(id={self.id}, group_id={self.group_id})>"
