"""
Category Entity Model

Exam subject area that notes and questions are filed under
(e.g. "General Knowledge", "Mathematics").
"""

from typing import Optional
import uuid

from sqlalchemy import String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from studyhub.shared.models.base import Base, TimestampMixin


class Category(Base, TimestampMixin):
    """Subject category. Names are unique."""

    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name})>"
