"""
Note and Question Schemas

Request/response models for notes, questions, votes and approval.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from studyhub.shared.models.enums import VoteAction, VoteType
from studyhub.shared.schemas.category import CategorySummary
from studyhub.shared.schemas.common import BaseSchema
from studyhub.shared.schemas.user import UserSummary


# ═══════════════════════════════════════════════════════════════════════════════
# REQUESTS
# ═══════════════════════════════════════════════════════════════════════════════


class ContentCreate(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1)
    category_id: Optional[UUID] = None
    tags: list[str] = Field(default_factory=list, max_length=20)
    file_url: Optional[str] = None


class ContentUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    title: Optional[str] = Field(None, min_length=1, max_length=300)
    content: Optional[str] = Field(None, min_length=1)
    category_id: Optional[UUID] = None
    tags: Optional[list[str]] = Field(None, max_length=20)
    file_url: Optional[str] = None


class NoteCreate(ContentCreate):
    file_type: Optional[str] = Field(None, max_length=50)


class NoteUpdate(ContentUpdate):
    file_type: Optional[str] = Field(None, max_length=50)


class QuestionCreate(ContentCreate):
    year: Optional[int] = Field(None, ge=1900, le=2200)


class QuestionUpdate(ContentUpdate):
    year: Optional[int] = Field(None, ge=1900, le=2200)


class ApprovalRequest(BaseModel):
    is_approved: bool


class VoteRequest(BaseModel):
    """``vote_type`` is validated by the vote service ("upvote" | "downvote")."""

    vote_type: str


# ═══════════════════════════════════════════════════════════════════════════════
# RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class ContentResponse(BaseSchema):
    id: UUID
    user_id: UUID
    title: str
    content: str
    file_url: Optional[str] = None
    is_approved: bool
    upvotes: int
    downvotes: int
    view_count: int
    author: UserSummary
    category: Optional[CategorySummary] = None
    tags: list[str] = Field(default_factory=list, validation_alias="tag_names")
    created_at: datetime
    updated_at: datetime


class NoteResponse(ContentResponse):
    file_type: Optional[str] = None


class QuestionResponse(ContentResponse):
    year: Optional[int] = None


class UserInteractionResponse(BaseSchema):
    bookmarked: bool = False
    vote: Optional[VoteType] = None


class NoteDetailResponse(NoteResponse):
    user_interaction: Optional[UserInteractionResponse] = None


class QuestionDetailResponse(QuestionResponse):
    user_interaction: Optional[UserInteractionResponse] = None


class VoteResultResponse(BaseSchema):
    action: VoteAction
    upvotes: int
    downvotes: int
    user_vote: Optional[VoteType] = None
