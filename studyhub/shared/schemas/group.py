"""
Group and Group Chat Schemas
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from studyhub.shared.models.enums import GroupRole, GroupType, MessageType
from studyhub.shared.schemas.common import BaseSchema
from studyhub.shared.schemas.user import UserSummary
from studyhub.shared.services.group_chat_service import ChatStats
from studyhub.shared.services.group_service import GroupView


# ═══════════════════════════════════════════════════════════════════════════════
# GROUPS
# ═══════════════════════════════════════════════════════════════════════════════


class GroupCreate(BaseModel):
    name: str = Field(min_length=1, max_length=150)
    description: Optional[str] = Field(None, max_length=2000)
    group_type: GroupType = GroupType.PUBLIC
    category: Optional[str] = Field(None, max_length=120)
    avatar: Optional[str] = None


class GroupUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    description: Optional[str] = Field(None, max_length=2000)
    group_type: Optional[GroupType] = None
    category: Optional[str] = Field(None, max_length=120)
    avatar: Optional[str] = None


class GroupResponse(BaseSchema):
    id: UUID
    name: str
    description: Optional[str] = None
    group_type: GroupType
    category: Optional[str] = None
    avatar: Optional[str] = None
    created_by: UUID
    creator: UserSummary
    member_count: int = 0
    is_member: bool = False
    role: Optional[GroupRole] = None
    created_at: datetime

    @classmethod
    def from_view(cls, view: GroupView) -> "GroupResponse":
        group = view.group
        return cls(
            id=group.id,
            name=group.name,
            description=group.description,
            group_type=group.group_type,
            category=group.category,
            avatar=group.avatar,
            created_by=group.created_by,
            creator=UserSummary.model_validate(group.creator),
            member_count=view.member_count,
            is_member=view.is_member,
            role=view.role,
            created_at=group.created_at,
        )


class GroupSummary(BaseSchema):
    id: UUID
    name: str
    description: Optional[str] = None
    group_type: GroupType
    category: Optional[str] = None
    avatar: Optional[str] = None


class MemberRoleUpdate(BaseModel):
    role: GroupRole


class GroupMemberResponse(BaseSchema):
    id: UUID
    group_id: UUID
    user_id: UUID
    role: GroupRole
    joined_at: datetime
    user: UserSummary


# ═══════════════════════════════════════════════════════════════════════════════
# CHAT
# ═══════════════════════════════════════════════════════════════════════════════


class MessageCreate(BaseModel):
    content: str = Field(min_length=1, max_length=5000)
    message_type: MessageType = MessageType.TEXT
    file_url: Optional[str] = None
    file_name: Optional[str] = Field(None, max_length=255)
    file_size: Optional[int] = Field(None, ge=0)
    reply_to_id: Optional[UUID] = None


class MessageUpdate(BaseModel):
    content: str = Field(min_length=1, max_length=5000)


class MessageResponse(BaseSchema):
    id: UUID
    group_id: UUID
    user_id: UUID
    sender: UserSummary
    content: str
    message_type: MessageType
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    reply_to_id: Optional[UUID] = None
    is_edited: bool
    is_deleted: bool
    created_at: datetime
    updated_at: datetime


class ContributorResponse(BaseModel):
    user: UserSummary
    message_count: int


class ChatStatsResponse(BaseModel):
    total_messages: int
    by_type: dict[str, int]
    top_contributors: list[ContributorResponse]

    @classmethod
    def from_stats(cls, stats: ChatStats) -> "ChatStatsResponse":
        return cls(
            total_messages=stats.total_messages,
            by_type=stats.by_type,
            top_contributors=[
                ContributorResponse(user=UserSummary.model_validate(user), message_count=n)
                for user, n in stats.top_contributors
            ],
        )
