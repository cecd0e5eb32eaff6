"""
Comment Schemas
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from studyhub.shared.schemas.common import BaseSchema
from studyhub.shared.schemas.user import UserSummary


class CommentCreate(BaseModel):
    content: str = Field(min_length=1, max_length=5000)


class CommentUpdate(CommentCreate):
    pass


class CommentResponse(BaseSchema):
    id: UUID
    user_id: UUID
    note_id: Optional[UUID] = None
    question_id: Optional[UUID] = None
    content: str
    author: UserSummary
    created_at: datetime
    updated_at: datetime
