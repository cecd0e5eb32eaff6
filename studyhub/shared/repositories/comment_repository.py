"""
Comment Repository
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from studyhub.shared.models import Comment, ContentType
from studyhub.shared.repositories.base import BaseRepository
from studyhub.shared.repositories.targets import target_clause, target_values


class CommentRepository(BaseRepository[Comment]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Comment, session)

    async def add(
        self,
        user_id: UUID,
        content_type: ContentType,
        content_id: UUID,
        content: str,
    ) -> Comment:
        return await self.create(
            user_id=user_id,
            content=content,
            **target_values(content_type, content_id),
        )

    async def list_for_target(
        self,
        content_type: ContentType,
        content_id: UUID,
        *,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[Comment], int]:
        """Oldest first, so a thread reads top to bottom."""
        clause = target_clause(Comment, content_type, content_id)
        result = await self.session.execute(
            select(Comment)
            .where(clause)
            .order_by(Comment.created_at.asc())
            .offset(offset)
            .limit(limit)
        )
        total = await self._scalar_count(select(sql_count()).select_from(Comment).where(clause))
        return list(result.scalars().all()), total

    async def count_for_target(self, content_type: ContentType, content_id: UUID) -> int:
        return await self._scalar_count(
            select(sql_count())
            .select_from(Comment)
            .where(target_clause(Comment, content_type, content_id))
        )

    async def count_by_user(self, user_id: UUID) -> int:
        return await self.count(filters={"user_id": user_id})
