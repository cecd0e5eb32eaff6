"""
User Schemas

Request/response models for user and authentication endpoints.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from studyhub.shared.schemas.common import BaseSchema


class UserBase(BaseModel):
    """Base user schema."""

    email: EmailStr


class UserCreate(UserBase):
    """Schema for user registration."""

    full_name: str = Field(min_length=1, max_length=150)
    password: str = Field(
        min_length=8,
        description="Password (minimum 8 characters)",
    )


class UserLogin(UserBase):
    """Schema for user login."""

    password: str = Field(min_length=1)


class RefreshTokenRequest(BaseModel):
    refresh_token: str


class ForgotPasswordRequest(UserBase):
    pass


class ResetPasswordRequest(BaseModel):
    token: str = Field(min_length=1)
    password: str = Field(
        min_length=8,
        description="New password (minimum 8 characters)",
    )


class UserSummary(BaseSchema):
    """Author/sender card embedded in other responses."""

    id: UUID
    full_name: str
    avatar: Optional[str] = None


class UserResponse(BaseSchema):
    """Schema for user response."""

    id: UUID
    email: str
    full_name: str
    avatar: Optional[str] = None
    bio: Optional[str] = None
    is_moderator: bool
    created_at: datetime


class AuthResponse(BaseModel):
    """Schema for authentication response."""

    user: UserResponse
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


# ═══════════════════════════════════════════════════════════════════════════════
# PROFILE
# ═══════════════════════════════════════════════════════════════════════════════

class ProfileUpdate(BaseModel):
    """Fields left out are not changed."""

    full_name: Optional[str] = Field(default=None, min_length=2, max_length=150)
    bio: Optional[str] = Field(default=None, max_length=500)


class AvatarUpdate(BaseModel):
    avatar: str = Field(min_length=1, max_length=500)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(
        min_length=8,
        description="New password (minimum 8 characters)",
    )


class DeleteAccountRequest(BaseModel):
    password: str = Field(min_length=1)


class PublicProfileResponse(BaseSchema):
    id: UUID
    full_name: str
    avatar: Optional[str] = None
    bio: Optional[str] = None
    created_at: datetime
    notes: int
    questions: int
