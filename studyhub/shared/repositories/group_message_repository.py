"""
Group Message Repository

Chat history is paged newest first in SQL and returned oldest first, so
page 1 is the latest window of the conversation in reading order.
"""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from studyhub.shared.models import GroupMessage, MessageType, User
from studyhub.shared.repositories.base import LIKE_ESCAPE, BaseRepository, contains_pattern


class GroupMessageRepository(BaseRepository[GroupMessage]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(GroupMessage, session)

    async def list_page(
        self,
        group_id: UUID,
        *,
        offset: int = 0,
        limit: int = 50,
    ) -> tuple[list[GroupMessage], int]:
        result = await self.session.execute(
            select(GroupMessage)
            .where(GroupMessage.group_id == group_id)
            .order_by(GroupMessage.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        messages = list(result.scalars().all())
        messages.reverse()

        total = await self.count(filters={"group_id": group_id})
        return messages, total

    async def search(self, group_id: UUID, query: str, *, limit: int = 50) -> list[GroupMessage]:
        """Non-deleted messages containing ``query``, newest first."""
        result = await self.session.execute(
            select(GroupMessage)
            .where(
                GroupMessage.group_id == group_id,
                GroupMessage.is_deleted.is_(False),
                func.lower(GroupMessage.content).like(contains_pattern(query), escape=LIKE_ESCAPE),
            )
            .order_by(GroupMessage.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def count_by_type(self, group_id: UUID) -> dict[MessageType, int]:
        result = await self.session.execute(
            select(GroupMessage.message_type, sql_count())
            .where(GroupMessage.group_id == group_id, GroupMessage.is_deleted.is_(False))
            .group_by(GroupMessage.message_type)
        )
        return {message_type: int(n) for message_type, n in result.all()}

    async def top_senders(self, group_id: UUID, *, limit: int = 5) -> list[tuple[User, int]]:
        message_count = sql_count(GroupMessage.id).label("message_count")
        result = await self.session.execute(
            select(User, message_count)
            .join(GroupMessage, GroupMessage.user_id == User.id)
            .where(GroupMessage.group_id == group_id, GroupMessage.is_deleted.is_(False))
            .group_by(User.id)
            .order_by(message_count.desc())
            .limit(limit)
        )
        return [(user, int(n)) for user, n in result.all()]
