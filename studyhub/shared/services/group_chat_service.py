"""
Group Chat Service

Messages inside a study group. Every operation requires membership;
edits and deletes additionally require being the sender.

Ordering is by insertion time only. Delivery to connected clients is the
realtime layer's concern and happens outside this service.
"""

from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.shared.core.exceptions import BusinessRuleError
from studyhub.shared.core.logging import logger
from studyhub.shared.models import (
    DELETED_MESSAGE_PLACEHOLDER,
    GroupMessage,
    MessageType,
    User,
)
from studyhub.shared.repositories import GroupMessageRepository
from studyhub.shared.services.common import Page, page_window, require_found, require_owner
from studyhub.shared.services.group_service import GroupService


@dataclass
class ChatStats:
    total_messages: int
    by_type: dict[str, int] = field(default_factory=dict)
    top_contributors: list[tuple[User, int]] = field(default_factory=list)


class GroupChatService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = GroupMessageRepository(session)
        self.groups = GroupService(session)

    async def list_messages(
        self,
        group_id: UUID,
        user: User,
        *,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> Page[GroupMessage]:
        """Page 1 is the most recent window, returned oldest first."""
        await self.groups.require_membership(group_id, user)
        offset, limit = page_window(page, limit or 50)
        items, total = await self.repo.list_page(group_id, offset=offset, limit=limit)
        return Page(items=items, total=total, page=page, limit=limit)

    async def send_message(
        self,
        group_id: UUID,
        user: User,
        *,
        content: str,
        message_type: MessageType = MessageType.TEXT,
        file_url: Optional[str] = None,
        file_name: Optional[str] = None,
        file_size: Optional[int] = None,
        reply_to_id: Optional[UUID] = None,
    ) -> GroupMessage:
        await self.groups.require_membership(group_id, user)

        if message_type != MessageType.TEXT and not file_url:
            raise BusinessRuleError(f"A file is required for {message_type.value} messages")

        message = await self.repo.create(
            group_id=group_id,
            user_id=user.id,
            content=content,
            message_type=message_type,
            file_url=file_url,
            file_name=file_name,
            file_size=file_size,
            reply_to_id=reply_to_id,
        )
        logger.info(
            "Message sent",
            group_id=str(group_id),
            message_id=str(message.id),
            user_id=str(user.id),
        )
        return message

    async def edit_message(self, message_id: UUID, user: User, content: str) -> GroupMessage:
        message = require_found(await self.repo.get(message_id), "Message", message_id)
        require_owner(message.user_id, user, "You can only edit your own messages")
        if message.is_deleted:
            raise BusinessRuleError("Deleted messages cannot be edited")
        return await self.repo.update_instance(message, content=content, is_edited=True)

    async def delete_message(self, message_id: UUID, user: User) -> GroupMessage:
        """Soft delete: the row stays, its content is replaced."""
        message = require_found(await self.repo.get(message_id), "Message", message_id)
        require_owner(message.user_id, user, "You can only delete your own messages")
        message = await self.repo.update_instance(
            message,
            content=DELETED_MESSAGE_PLACEHOLDER,
            is_deleted=True,
        )
        logger.info("Message deleted", message_id=str(message_id), user_id=str(user.id))
        return message

    async def search_messages(self, group_id: UUID, user: User, query: str) -> list[GroupMessage]:
        await self.groups.require_membership(group_id, user)
        return await self.repo.search(group_id, query)

    async def chat_stats(self, group_id: UUID, user: User) -> ChatStats:
        await self.groups.require_membership(group_id, user)
        by_type = await self.repo.count_by_type(group_id)
        return ChatStats(
            total_messages=sum(by_type.values()),
            by_type={t.value: n for t, n in by_type.items()},
            top_contributors=await self.repo.top_senders(group_id),
        )
