"""
Uploaded File Repository
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from studyhub.shared.models import UploadedFile
from studyhub.shared.repositories.base import BaseRepository


class UploadedFileRepository(BaseRepository[UploadedFile]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(UploadedFile, session)

    async def list_for_user(
        self,
        user_id: UUID,
        *,
        category: Optional[str] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[UploadedFile], int]:
        conditions = [UploadedFile.user_id == user_id]
        if category:
            conditions.append(UploadedFile.category == category)

        result = await self.session.execute(
            select(UploadedFile)
            .where(*conditions)
            .order_by(UploadedFile.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        total = await self._scalar_count(
            select(sql_count()).select_from(UploadedFile).where(*conditions)
        )
        return list(result.scalars().all()), total
