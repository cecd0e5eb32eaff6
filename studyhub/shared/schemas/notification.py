"""
Notification Schemas
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from studyhub.shared.models.enums import NotificationType
from studyhub.shared.schemas.common import BaseSchema


class NotificationResponse(BaseSchema):
    id: UUID
    title: str
    message: str
    type: NotificationType
    data: Optional[dict[str, Any]] = None
    is_read: bool
    created_at: datetime
