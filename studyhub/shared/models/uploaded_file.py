"""
UploadedFile Entity Model

Metadata for a file stored under the upload directory.
The bytes live on disk at ``UPLOAD_DIR/<category>/<file_name>``.
"""

from typing import Optional
import uuid

from sqlalchemy import BigInteger, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from studyhub.shared.models.base import Base, TimestampMixin


class UploadedFile(Base, TimestampMixin):
    """
    Uploaded file record.

    Attributes:
        id: Unique identifier (UUID v4)
        user_id: Uploader
        file_name: Collision-free name on disk
        original_name: File name as sent by the client
        mime_type: MIME type reported by the client
        size: Stored size in bytes
        path: Location on disk relative to the working directory
        url: Public URL path served by the static mount
        category: Sub-directory (notes, questions, avatars, chat, ...)
    """

    __tablename__ = "uploaded_files"

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

    file_name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    original_name: Mapped[str] = mapped_column(String(255), nullable=False)
    mime_type: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)
    size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    path: Mapped[str] = mapped_column(Text, nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<UploadedFile(id={self.id}, name={self.original_name})>"
