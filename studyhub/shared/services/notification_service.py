"""
Notification Service

In-app notifications: the user-facing inbox operations plus the
``notify`` / ``notify_many`` helpers other services call when something
happens to a user (joined a group, content approved, report resolved).
"""

from typing import Any, Iterable, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.shared.core.logging import logger
from studyhub.shared.models import Notification, NotificationType, User
from studyhub.shared.repositories import NotificationRepository
from studyhub.shared.services.common import Page, page_window, require_found, require_owner


class NotificationService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = NotificationRepository(session)

    # ═══════════════════════════════════════════════════════════════════════════
    # INBOX
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_notifications(
        self,
        user: User,
        *,
        unread_only: bool = False,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> Page[Notification]:
        offset, limit = page_window(page, limit)
        items, total = await self.repo.list_for_user(
            user.id,
            unread_only=unread_only,
            offset=offset,
            limit=limit,
        )
        return Page(items=items, total=total, page=page, limit=limit)

    async def unread_count(self, user: User) -> int:
        return await self.repo.count_unread(user.id)

    async def mark_read(self, notification_id: UUID, user: User) -> Notification:
        notification = require_found(
            await self.repo.get(notification_id), "Notification", notification_id
        )
        require_owner(notification.user_id, user)
        return await self.repo.update_instance(notification, is_read=True)

    async def mark_all_read(self, user: User) -> int:
        return await self.repo.mark_all_read(user.id)

    async def delete_notification(self, notification_id: UUID, user: User) -> None:
        notification = require_found(
            await self.repo.get(notification_id), "Notification", notification_id
        )
        require_owner(notification.user_id, user)
        await self.repo.delete_instance(notification)

    async def delete_all(self, user: User) -> int:
        return await self.repo.delete_all_for_user(user.id)

    # ═══════════════════════════════════════════════════════════════════════════
    # FAN-OUT
    # ═══════════════════════════════════════════════════════════════════════════

    async def notify(
        self,
        user_id: UUID,
        title: str,
        message: str,
        type: NotificationType = NotificationType.INFO,
        data: Optional[dict[str, Any]] = None,
    ) -> Notification:
        notification = await self.repo.create(
            user_id=user_id,
            title=title,
            message=message,
            type=type,
            data=data,
        )
        logger.info("Notification created", user_id=str(user_id), title=title)
        return notification

    async def notify_many(
        self,
        user_ids: Iterable[UUID],
        title: str,
        message: str,
        type: NotificationType = NotificationType.INFO,
        data: Optional[dict[str, Any]] = None,
    ) -> int:
        sent = 0
        for user_id in user_ids:
            await self.notify(user_id, title, message, type=type, data=data)
            sent += 1
        return sent
