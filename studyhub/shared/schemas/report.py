"""
Report Schemas
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from studyhub.shared.models.enums import ContentType, ReportStatus
from studyhub.shared.schemas.common import BaseSchema
from studyhub.shared.schemas.user import UserSummary


class ReportCreate(BaseModel):
    """``content_type`` is "note", "question" or "comment"."""

    content_type: str
    content_id: UUID
    reason: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)


class ReportStatusUpdate(BaseModel):
    status: ReportStatus


class ReportResponse(BaseSchema):
    id: UUID
    user_id: UUID
    content_type: ContentType
    content_id: UUID
    reason: str
    description: Optional[str] = None
    status: ReportStatus
    reporter: UserSummary
    created_at: datetime
    updated_at: datetime
