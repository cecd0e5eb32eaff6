"""
Upload Schemas
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from studyhub.shared.schemas.common import BaseSchema


class UploadedFileResponse(BaseSchema):
    id: UUID
    user_id: UUID
    file_name: str
    original_name: str
    mime_type: Optional[str] = None
    size: int
    url: str
    category: str
    created_at: datetime
