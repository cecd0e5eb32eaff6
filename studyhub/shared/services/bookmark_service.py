"""
Bookmark Service

Bookmark toggling: present → removed, absent → added. Two toggles always
return the pair to where it started, and the (user, item) unique
constraint guarantees no duplicate rows even under concurrent toggles.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.shared.core.logging import logger
from studyhub.shared.models import Bookmark, ContentType, User
from studyhub.shared.repositories import BookmarkRepository, content_repository_for
from studyhub.shared.services.common import (
    RESOURCE_NAMES,
    Page,
    page_window,
    parse_content_type,
    require_found,
)


class BookmarkService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = BookmarkRepository(session)

    async def toggle(
        self,
        user: User,
        content_type: "ContentType | str",
        content_id: UUID,
    ) -> bool:
        """
        Flip the bookmark for (user, item).

        Returns:
            True if the item is bookmarked afterwards, False otherwise
        """
        content_type = parse_content_type(content_type)
        require_found(
            await content_repository_for(content_type, self.session).get_visible(content_id, user),
            RESOURCE_NAMES[content_type],
            content_id,
        )

        existing = await self.repo.get_for_user(user.id, content_type, content_id)
        if existing is not None:
            await self.repo.delete_instance(existing)
            bookmarked = False
        else:
            try:
                async with self.session.begin_nested():
                    await self.repo.add(user.id, content_type, content_id)
            except IntegrityError:
                # Concurrent toggle already created it
                pass
            bookmarked = True

        logger.info(
            "Bookmark toggled",
            user_id=str(user.id),
            content_type=content_type.value,
            content_id=str(content_id),
            bookmarked=bookmarked,
        )
        return bookmarked

    async def is_bookmarked(
        self,
        user: User,
        content_type: "ContentType | str",
        content_id: UUID,
    ) -> bool:
        content_type = parse_content_type(content_type)
        return await self.repo.get_for_user(user.id, content_type, content_id) is not None

    async def list_bookmarks(
        self,
        user: User,
        *,
        content_type: Optional["ContentType | str"] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> Page[Bookmark]:
        parsed = parse_content_type(content_type) if content_type is not None else None
        offset, limit = page_window(page, limit)
        items, total = await self.repo.list_for_user(
            user.id,
            content_type=parsed,
            offset=offset,
            limit=limit,
        )
        return Page(items=items, total=total, page=page, limit=limit)

    async def bookmark_count(self, content_type: ContentType, content_id: UUID) -> int:
        return await self.repo.count_for_target(content_type, content_id)
