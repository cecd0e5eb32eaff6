"""
Report Entity Model

A user's report that a piece of content breaks the rules.

Reports address their target generically by (content_type, content_id):
notes, questions and comments can all be reported. Target existence is
checked by the report service when the report is filed; a report outlives
its target if the target is later deleted.

Status Flow:
============
    PENDING ──► REVIEWED ──► RESOLVED     (moderators only)
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studyhub.shared.models.base import Base, TimestampMixin
from studyhub.shared.models.enums import ContentType, ReportStatus


if TYPE_CHECKING:
    from studyhub.shared.models.user import User


class Report(Base, TimestampMixin):
    """
    Report model.

    Attributes:
        id: Unique identifier (UUID v4)
        user_id: Reporter
        content_type: Kind of the reported item
        content_id: Id of the reported item
        reason: Short reason label
        description: Optional free text
        status: Moderation status
    """

    __tablename__ = "reports"

    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "content_type",
            "content_id",
            name="uq_reports_user_content",
        ),
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

    content_type: Mapped[ContentType] = mapped_column(
        SQLEnum(ContentType),
        nullable=False,
    )

    content_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    reason: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[ReportStatus] = mapped_column(
        SQLEnum(ReportStatus),
        default=ReportStatus.PENDING,
        nullable=False,
        index=True,
    )

    reporter: Mapped["User"] = relationship("User", lazy="selectin")

    def __repr__(self) -> str:
        return (
            f"<Report(id={self.id}, content={self.content_type.value}:{self.content_id}, "
            f"status={self.status.value})>"
        )
