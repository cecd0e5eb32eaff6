"""
Report Repository

Reports address their target by (content_type, content_id). Filing a
second report for the same pair violates ``uq_reports_user_content``.
"""

from typing import Any, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from studyhub.shared.models import ContentType, Report, ReportStatus
from studyhub.shared.repositories.base import BaseRepository


class ReportRepository(BaseRepository[Report]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Report, session)

    async def get_for_user(
        self,
        user_id: UUID,
        content_type: ContentType,
        content_id: UUID,
    ) -> Optional[Report]:
        result = await self.session.execute(
            select(Report).where(
                Report.user_id == user_id,
                Report.content_type == content_type,
                Report.content_id == content_id,
            )
        )
        return result.scalar_one_or_none()

    async def add(self, **kwargs: Any) -> Report:
        """Insert a report. Raises ``IntegrityError`` on a duplicate pair."""
        report = Report(**kwargs)
        self.session.add(report)
        await self.session.flush()
        await self.session.refresh(report)
        return report

    async def list_filtered(
        self,
        *,
        user_id: Optional[UUID] = None,
        status: Optional[ReportStatus] = None,
        content_type: Optional[ContentType] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[Report], int]:
        conditions = []
        if user_id is not None:
            conditions.append(Report.user_id == user_id)
        if status is not None:
            conditions.append(Report.status == status)
        if content_type is not None:
            conditions.append(Report.content_type == content_type)

        result = await self.session.execute(
            select(Report)
            .where(*conditions)
            .order_by(Report.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        total = await self._scalar_count(select(sql_count()).select_from(Report).where(*conditions))
        return list(result.scalars().all()), total
