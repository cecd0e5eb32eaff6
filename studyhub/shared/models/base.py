"""
Base Model Classes

The declarative base and shared mixins for every StudyHub model.

Model Hierarchy:
================
    Base                    ← SQLAlchemy declarative base
       │
       └── TimestampMixin   ← Automatic created_at/updated_at

Usage:
======
    from studyhub.shared.models.base import Base, TimestampMixin

    class Category(Base, TimestampMixin):
        __tablename__ = "categories"
        id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
        name: Mapped[str] = mapped_column(String(120), unique=True)
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Timezone-aware current time, used for column defaults."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Maps ``dict[str, Any]`` annotations to the portable JSON type so the same
    models run on PostgreSQL and on the SQLite test database.
    """

    type_annotation_map = {
        dict[str, Any]: JSON,
    }


class TimestampMixin:
    """
    Mixin that adds automatic timestamp tracking to models.

    - created_at: Set when the record is first inserted
    - updated_at: Updated whenever the record is modified

    Database Behavior:
    ==================
    Both columns get a Python-side default with microsecond precision, so
    rows inserted within the same second still order by creation. The
    server_default covers rows written outside the ORM.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
        index=True,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=utcnow,
        nullable=False,
    )
