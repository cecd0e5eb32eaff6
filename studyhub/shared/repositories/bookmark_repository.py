"""
Bookmark Repository

Presence checks and paging for bookmarks. Uniqueness of the
(user, item) pair is enforced by the table's unique constraints.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from studyhub.shared.models import Bookmark, ContentType
from studyhub.shared.repositories.base import BaseRepository
from studyhub.shared.repositories.targets import target_clause, target_column, target_values


class BookmarkRepository(BaseRepository[Bookmark]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Bookmark, session)

    async def get_for_user(
        self,
        user_id: UUID,
        content_type: ContentType,
        content_id: UUID,
    ) -> Optional[Bookmark]:
        result = await self.session.execute(
            select(Bookmark).where(
                Bookmark.user_id == user_id,
                target_clause(Bookmark, content_type, content_id),
            )
        )
        return result.scalar_one_or_none()

    async def add(self, user_id: UUID, content_type: ContentType, content_id: UUID) -> Bookmark:
        """Insert a bookmark. Raises ``IntegrityError`` if the pair exists."""
        bookmark = Bookmark(user_id=user_id, **target_values(content_type, content_id))
        self.session.add(bookmark)
        await self.session.flush()
        return bookmark

    async def list_for_user(
        self,
        user_id: UUID,
        *,
        content_type: Optional[ContentType] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[Bookmark], int]:
        """Newest first, optionally only notes or only questions."""
        conditions = [Bookmark.user_id == user_id]
        if content_type is not None:
            conditions.append(target_column(Bookmark, content_type).is_not(None))

        result = await self.session.execute(
            select(Bookmark)
            .where(*conditions)
            .order_by(Bookmark.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        total = await self._scalar_count(
            select(sql_count()).select_from(Bookmark).where(*conditions)
        )
        return list(result.scalars().all()), total

    async def count_for_target(self, content_type: ContentType, content_id: UUID) -> int:
        return await self._scalar_count(
            select(sql_count())
            .select_from(Bookmark)
            .where(target_clause(Bookmark, content_type, content_id))
        )

    async def count_rows(self, user_id: UUID, content_type: ContentType, content_id: UUID) -> int:
        return await self._scalar_count(
            select(sql_count())
            .select_from(Bookmark)
            .where(Bookmark.user_id == user_id, target_clause(Bookmark, content_type, content_id))
        )
