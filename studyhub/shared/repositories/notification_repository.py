"""
Notification Repository
"""

from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from studyhub.shared.models import Notification
from studyhub.shared.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Notification, session)

    async def list_for_user(
        self,
        user_id: UUID,
        *,
        unread_only: bool = False,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[Notification], int]:
        conditions = [Notification.user_id == user_id]
        if unread_only:
            conditions.append(Notification.is_read.is_(False))

        result = await self.session.execute(
            select(Notification)
            .where(*conditions)
            .order_by(Notification.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        total = await self._scalar_count(
            select(sql_count()).select_from(Notification).where(*conditions)
        )
        return list(result.scalars().all()), total

    async def count_unread(self, user_id: UUID) -> int:
        return await self.count(filters={"user_id": user_id, "is_read": False})

    async def mark_all_read(self, user_id: UUID) -> int:
        """Returns the number of notifications that changed."""
        result = await self.session.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
            .values(is_read=True)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0

    async def delete_all_for_user(self, user_id: UUID) -> int:
        result = await self.session.execute(
            delete(Notification)
            .where(Notification.user_id == user_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0
