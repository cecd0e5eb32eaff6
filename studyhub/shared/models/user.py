"""
User Entity Model

Represents a registered student (or moderator) account.

SAMPLE USER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id                         │ 550e8400-e29b-41d4-a716-446655440000            │
│ email                      │ "student@example.com"                           │
│ full_name                  │ "Asha Karki"                                    │
│ password_hash              │ "$2b$12$..."                                    │
│ is_moderator               │ false                                           │
│ refresh_token              │ "eyJhbGciOi..." (current, rotated on refresh)   │
│ password_reset_token_hash  │ NULL (sha256 hex while a reset is pending)      │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from typing import Optional
import uuid

from sqlalchemy import Boolean, DateTime, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from studyhub.shared.models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """
    User model representing a registered account.

    Attributes:
        id: Unique identifier (UUID v4)
        email: Login email (unique, indexed)
        password_hash: Bcrypt hashed password
        full_name: Display name
        avatar: Optional avatar URL
        bio: Optional short biography
        is_moderator: May approve content and manage reports
        refresh_token: The only refresh token currently accepted
        password_reset_token_hash: SHA-256 of the emailed reset token
        password_reset_expires_at: When the pending reset token stops working
        last_login_at: Timestamp of the last successful login
    """

    __tablename__ = "users"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # AUTHENTICATION
    # ═══════════════════════════════════════════════════════════════════════════

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    password_hash: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    refresh_token: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    password_reset_token_hash: Mapped[Optional[str]] = mapped_column(
        String(64),
        nullable=True,
        index=True,
    )

    password_reset_expires_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    last_login_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PROFILE
    # ═══════════════════════════════════════════════════════════════════════════

    full_name: Mapped[str] = mapped_column(String(150), nullable=False)
    avatar: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # ROLES
    # ═══════════════════════════════════════════════════════════════════════════

    is_moderator: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<User(id={self.id}, email={self.email})>"
