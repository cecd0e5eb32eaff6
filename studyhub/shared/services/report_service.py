"""
Report Service

Filing and moderating reports.

Target Existence:
=================
Which repository answers "does this content still exist?" is looked up in
``REPORT_TARGETS`` by content type, so adding a reportable kind is one
registry entry rather than another branch.

Deduplication:
==============
One report per (user, content). The service checks first for a friendly
error, and the unique constraint catches the concurrent case:

    SELECT existing ──► found ──► BusinessRuleError("already reported")
          │
          └── none ──► SAVEPOINT INSERT ──► IntegrityError ──► same error
"""

from typing import Callable, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.shared.core.exceptions import AuthorizationError, BusinessRuleError, NotFoundError
from studyhub.shared.core.logging import logger
from studyhub.shared.models import ContentType, NotificationType, Report, ReportStatus, User
from studyhub.shared.repositories import (
    BaseRepository,
    CommentRepository,
    NoteRepository,
    QuestionRepository,
    ReportRepository,
)
from studyhub.shared.services.common import (
    RESOURCE_NAMES,
    Page,
    page_window,
    parse_content_type,
    require_found,
    require_owner,
)
from studyhub.shared.services.notification_service import NotificationService


ALREADY_REPORTED = "You have already reported this content"

REPORT_TARGETS: dict[ContentType, Callable[[AsyncSession], BaseRepository]] = {
    ContentType.NOTE: NoteRepository,
    ContentType.QUESTION: QuestionRepository,
    ContentType.COMMENT: CommentRepository,
}


class ReportService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = ReportRepository(session)
        self.notifications = NotificationService(session)

    async def target_exists(self, content_type: ContentType, content_id: UUID) -> bool:
        return await REPORT_TARGETS[content_type](self.session).exists(content_id)

    async def create_report(
        self,
        user: User,
        content_type: "ContentType | str",
        content_id: UUID,
        reason: str,
        description: Optional[str] = None,
    ) -> Report:
        """
        File a report.

        Raises:
            ValidationError: Unknown content type
            NotFoundError: Target does not exist (or was removed)
            BusinessRuleError: Caller already reported this target
        """
        content_type = parse_content_type(content_type, allowed=tuple(REPORT_TARGETS))

        if not await self.target_exists(content_type, content_id):
            raise NotFoundError(RESOURCE_NAMES[content_type], content_id)

        if await self.repo.get_for_user(user.id, content_type, content_id) is not None:
            raise BusinessRuleError(ALREADY_REPORTED)

        try:
            async with self.session.begin_nested():
                report = await self.repo.add(
                    user_id=user.id,
                    content_type=content_type,
                    content_id=content_id,
                    reason=reason,
                    description=description,
                )
        except IntegrityError:
            raise BusinessRuleError(ALREADY_REPORTED)

        logger.info(
            "Report created",
            report_id=str(report.id),
            user_id=str(user.id),
            content_type=content_type.value,
            content_id=str(content_id),
        )
        return report

    async def list_my_reports(
        self,
        user: User,
        *,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> Page[Report]:
        offset, limit = page_window(page, limit)
        items, total = await self.repo.list_filtered(user_id=user.id, offset=offset, limit=limit)
        return Page(items=items, total=total, page=page, limit=limit)

    async def list_reports(
        self,
        *,
        status: Optional[ReportStatus] = None,
        content_type: Optional[ContentType] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> Page[Report]:
        """All reports, for moderators."""
        offset, limit = page_window(page, limit)
        items, total = await self.repo.list_filtered(
            status=status,
            content_type=content_type,
            offset=offset,
            limit=limit,
        )
        return Page(items=items, total=total, page=page, limit=limit)

    async def update_status(
        self,
        report_id: UUID,
        moderator: User,
        status: ReportStatus,
    ) -> Report:
        report = require_found(await self.repo.get(report_id), "Report", report_id)
        if report.user_id == moderator.id:
            raise AuthorizationError("You cannot moderate your own report")
        report = await self.repo.update_instance(report, status=status)

        await self.notifications.notify(
            report.user_id,
            "Report Updated",
            f"Your report has been marked as {status.value}",
            type=NotificationType.INFO,
            data={"report_id": str(report.id), "status": status.value},
        )
        logger.info(
            "Report status changed",
            report_id=str(report.id),
            moderator_id=str(moderator.id),
            status=status.value,
        )
        return report

    async def delete_report(self, report_id: UUID, user: User) -> None:
        report = require_found(await self.repo.get(report_id), "Report", report_id)
        require_owner(report.user_id, user, "You are not authorized to delete this report")
        await self.repo.delete_instance(report)
