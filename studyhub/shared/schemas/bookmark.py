"""
Bookmark Schemas
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from studyhub.shared.schemas.common import BaseSchema
from studyhub.shared.schemas.content import NoteResponse, QuestionResponse


class BookmarkToggleRequest(BaseModel):
    """``content_type`` is "note" or "question"."""

    content_type: str
    content_id: UUID


class BookmarkStatusResponse(BaseModel):
    bookmarked: bool


class BookmarkResponse(BaseSchema):
    id: UUID
    note_id: Optional[UUID] = None
    question_id: Optional[UUID] = None
    note: Optional[NoteResponse] = None
    question: Optional[QuestionResponse] = None
    created_at: datetime
