"""
Content Service

Business logic shared by notes and questions. NoteService and
QuestionService bind the repository and naming; everything else, from
visibility to ownership checks to comments, is written once here.

Operation Guards:
=================
    operation        lookup                      guard
    ───────────────  ──────────────────────────  ─────────────────────────
    list / detail    visibility predicate        hidden → absent / 404
    comment / vote   visibility predicate        hidden → 404
    update / delete  plain get                   404 first, then owner → 403
    approval         plain get                   404, moderator checked upstream

Approval:
=========
New items start approved unless CONTENT_REQUIRES_APPROVAL is set, in which
case they wait for a moderator. Owners always see their own items.

Usage:
======
    service = NoteService(db)
    note = await service.create(user, title="...", content="...", tags=["gk"])
    page = await service.list(viewer=None, page=1, limit=10)
"""

from dataclasses import dataclass
from typing import Any, Generic, Optional, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.config.settings import settings
from studyhub.shared.core.logging import logger
from studyhub.shared.models import Comment, ContentSort, ContentType, NotificationType, User, VoteType
from studyhub.shared.repositories import (
    BookmarkRepository,
    CategoryRepository,
    CommentRepository,
    NoteRepository,
    QuestionRepository,
    TagRepository,
    VoteRepository,
)
from studyhub.shared.repositories.content_repository import ContentModel, ContentRepository
from studyhub.shared.services.common import Page, page_window, require_found, require_owner
from studyhub.shared.services.notification_service import NotificationService


@dataclass
class UserInteraction:
    """What the caller has done with an item."""

    bookmarked: bool = False
    vote: Optional[VoteType] = None


class ContentService(Generic[ContentModel]):
    """
    Base service for a moderated content type.

    Subclasses set ``content_type`` and ``repository_class``.
    """

    content_type: ContentType
    repository_class: type[ContentRepository]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = self.repository_class(session)
        self.tag_repo = TagRepository(session)
        self.category_repo = CategoryRepository(session)
        self.comment_repo = CommentRepository(session)
        self.vote_repo = VoteRepository(session)
        self.bookmark_repo = BookmarkRepository(session)
        self.notifications = NotificationService(session)

    @property
    def resource_name(self) -> str:
        return self.content_type.value.capitalize()

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(
        self,
        user: User,
        *,
        title: str,
        content: str,
        category_id: Optional[UUID] = None,
        tags: Optional[Sequence[str]] = None,
        file_url: Optional[str] = None,
        **extra: Any,
    ) -> ContentModel:
        """
        Create an item owned by ``user``.

        Raises:
            NotFoundError: ``category_id`` does not exist
        """
        if category_id is not None:
            require_found(await self.category_repo.get(category_id), "Category", category_id)

        item = await self.repo.create(
            user_id=user.id,
            title=title,
            content=content,
            category_id=category_id,
            file_url=file_url,
            is_approved=not settings.CONTENT_REQUIRES_APPROVAL,
            **extra,
        )
        if tags:
            await self.repo.replace_tags(item, await self.tag_repo.get_or_create_many(tags))

        logger.info(
            f"{self.resource_name} created",
            item_id=str(item.id),
            user_id=str(user.id),
            is_approved=item.is_approved,
        )
        return item

    # ═══════════════════════════════════════════════════════════════════════════
    # READ
    # ═══════════════════════════════════════════════════════════════════════════

    async def list(
        self,
        viewer: Optional[User],
        *,
        include_unapproved: bool = False,
        page: int = 1,
        limit: Optional[int] = None,
        category_id: Optional[UUID] = None,
        user_id: Optional[UUID] = None,
        tags: Optional[Sequence[str]] = None,
        search: Optional[str] = None,
        year: Optional[int] = None,
        sort_by: ContentSort = ContentSort.RECENT,
    ) -> Page[ContentModel]:
        offset, limit = page_window(page, limit)
        items, total = await self.repo.list_visible(
            viewer=viewer,
            include_unapproved=include_unapproved,
            category_id=category_id,
            user_id=user_id,
            tags=tags,
            search=search,
            year=year,
            sort_by=sort_by,
            offset=offset,
            limit=limit,
        )
        return Page(items=items, total=total, page=page, limit=limit)

    async def get_visible(self, item_id: UUID, viewer: Optional[User]) -> ContentModel:
        return require_found(
            await self.repo.get_visible(item_id, viewer),
            self.resource_name,
            item_id,
        )

    async def get_detail(
        self,
        item_id: UUID,
        viewer: Optional[User],
    ) -> tuple[ContentModel, Optional[UserInteraction]]:
        """
        Load an item for display, counting the view.

        Returns:
            The item and, for an authenticated caller, their interaction
        """
        item = await self.get_visible(item_id, viewer)
        await self.repo.increment_view_count(item)

        if viewer is None:
            return item, None

        bookmark = await self.bookmark_repo.get_for_user(viewer.id, self.content_type, item.id)
        vote = await self.vote_repo.get_for_user(viewer.id, self.content_type, item.id)
        return item, UserInteraction(
            bookmarked=bookmark is not None,
            vote=vote.vote_type if vote else None,
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # UPDATE / DELETE (owner only)
    # ═══════════════════════════════════════════════════════════════════════════

    async def update(
        self,
        item_id: UUID,
        user: User,
        *,
        tags: Optional[Sequence[str]] = None,
        **fields: Any,
    ) -> ContentModel:
        """
        Partially update an item. ``None`` fields are left unchanged.

        Raises:
            NotFoundError: Item does not exist
            AuthorizationError: Caller is not the owner
        """
        item = require_found(await self.repo.get(item_id), self.resource_name, item_id)
        require_owner(
            item.user_id,
            user,
            f"You are not authorized to update this {self.content_type.value}",
        )

        if fields.get("category_id") is not None:
            require_found(
                await self.category_repo.get(fields["category_id"]),
                "Category",
                fields["category_id"],
            )

        item = await self.repo.update_instance(item, **fields)
        if tags is not None:
            await self.repo.replace_tags(item, await self.tag_repo.get_or_create_many(tags))

        logger.info(f"{self.resource_name} updated", item_id=str(item.id), user_id=str(user.id))
        return item

    async def delete(self, item_id: UUID, user: User) -> None:
        item = require_found(await self.repo.get(item_id), self.resource_name, item_id)
        require_owner(
            item.user_id,
            user,
            f"You are not authorized to delete this {self.content_type.value}",
        )

        await self.repo.delete_with_dependents(item)
        logger.info(f"{self.resource_name} deleted", item_id=str(item_id), user_id=str(user.id))

    # ═══════════════════════════════════════════════════════════════════════════
    # MODERATION
    # ═══════════════════════════════════════════════════════════════════════════

    async def set_approval(self, item_id: UUID, moderator: User, is_approved: bool) -> ContentModel:
        """Approve or unapprove an item and tell its owner."""
        item = require_found(await self.repo.get(item_id), self.resource_name, item_id)
        item = await self.repo.set_approval(item, is_approved)

        kind = self.content_type.value
        if is_approved:
            await self.notifications.notify(
                item.user_id,
                f"{self.resource_name} Approved",
                f'Your {kind} "{item.title}" has been approved',
                type=NotificationType.SUCCESS,
                data={f"{kind}_id": str(item.id)},
            )
        else:
            await self.notifications.notify(
                item.user_id,
                f"{self.resource_name} Unapproved",
                f'Your {kind} "{item.title}" is no longer publicly visible',
                type=NotificationType.WARNING,
                data={f"{kind}_id": str(item.id)},
            )

        logger.info(
            f"{self.resource_name} approval changed",
            item_id=str(item.id),
            moderator_id=str(moderator.id),
            is_approved=is_approved,
        )
        return item

    # ═══════════════════════════════════════════════════════════════════════════
    # COMMENTS
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_comments(
        self,
        item_id: UUID,
        viewer: Optional[User],
        *,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> Page[Comment]:
        await self.get_visible(item_id, viewer)
        offset, limit = page_window(page, limit)
        items, total = await self.comment_repo.list_for_target(
            self.content_type,
            item_id,
            offset=offset,
            limit=limit,
        )
        return Page(items=items, total=total, page=page, limit=limit)

    async def add_comment(self, item_id: UUID, user: User, content: str) -> Comment:
        item = await self.get_visible(item_id, user)
        comment = await self.comment_repo.add(user.id, self.content_type, item.id, content)
        logger.info(
            "Comment added",
            comment_id=str(comment.id),
            content_type=self.content_type.value,
            content_id=str(item.id),
            user_id=str(user.id),
        )
        return comment


class NoteService(ContentService):
    content_type = ContentType.NOTE
    repository_class = NoteRepository


class QuestionService(ContentService):
    content_type = ContentType.QUESTION
    repository_class = QuestionRepository
