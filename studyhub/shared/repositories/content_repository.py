"""
Content Repository

Shared queries for the two moderated content models, Note and Question.
NoteRepository and QuestionRepository are thin subclasses, so the listing,
visibility and vote-tally logic exists once.

Visibility:
===========
Every read that can expose an item (list, count, search, detail, and the
lookups behind votes, bookmarks and comments) goes through
``visibility_clause``. The predicate lives inside the SQL statement, so a
hidden item is absent from the page, from the total, and from a direct
lookup alike.

    caller                     include_unapproved   sees
    ─────────────────────────  ──────────────────   ───────────────────────
    anonymous                  (ignored)            approved
    authenticated              False                approved
    authenticated              True                 approved + own
    moderator                  True                 everything

Deletion:
=========
``delete_with_dependents`` removes the comments, votes and bookmarks that
point at the item before deleting the row itself, in the same transaction.
"""

from datetime import datetime
from typing import Any, Generic, Optional, Sequence, TypeVar, Union
from uuid import UUID

from sqlalchemy import ColumnElement, Select, delete, func, or_, select, true, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from studyhub.shared.models import (
    Bookmark,
    Comment,
    ContentSort,
    ContentType,
    Note,
    Question,
    Tag,
    User,
    Vote,
)
from studyhub.shared.repositories.base import LIKE_ESCAPE, BaseRepository, contains_pattern


ContentModel = TypeVar("ContentModel", Note, Question)


def visibility_clause(
    model: Union[type[Note], type[Question]],
    viewer: Optional[User],
    include_unapproved: bool = False,
) -> ColumnElement[bool]:
    """Build the WHERE predicate deciding which rows ``viewer`` may see."""
    if viewer is None or not include_unapproved:
        return model.is_approved.is_(True)
    if viewer.is_moderator:
        return true()
    return or_(model.is_approved.is_(True), model.user_id == viewer.id)


class ContentRepository(BaseRepository[ContentModel], Generic[ContentModel]):
    """
    Repository for notes and questions.

    Subclasses only bind the model and its ContentType discriminator.
    """

    content_type: ContentType

    # ═══════════════════════════════════════════════════════════════════════════
    # VISIBLE READS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_visible(
        self,
        item_id: UUID,
        viewer: Optional[User],
        *,
        for_update: bool = False,
    ) -> Optional[ContentModel]:
        """
        Load one item if ``viewer`` may see it.

        Owners and moderators see their unapproved items on direct lookup.
        With ``for_update`` the row is locked until the transaction ends
        (a no-op on SQLite) and reloaded from the database.
        """
        stmt = select(self.model).where(
            self.model.id == item_id,
            visibility_clause(self.model, viewer, include_unapproved=True),
        )
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_visible(
        self,
        *,
        viewer: Optional[User],
        include_unapproved: bool = False,
        category_id: Optional[UUID] = None,
        user_id: Optional[UUID] = None,
        tags: Optional[Sequence[str]] = None,
        search: Optional[str] = None,
        year: Optional[int] = None,
        sort_by: ContentSort = ContentSort.RECENT,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[ContentModel], int]:
        """
        Return one page of visible items and the visible total.

        The page query and the count query share the same WHERE clauses.

        SQL Generated (simplified):
            SELECT * FROM notes
            WHERE is_approved AND category_id = ? AND lower(title) LIKE ?
            ORDER BY upvotes DESC, created_at DESC
            OFFSET ? LIMIT ?
        """
        conditions = [visibility_clause(self.model, viewer, include_unapproved)]

        if category_id is not None:
            conditions.append(self.model.category_id == category_id)
        if user_id is not None:
            conditions.append(self.model.user_id == user_id)
        if tags:
            conditions.append(self.model.tags.any(Tag.name.in_([t.lower() for t in tags])))
        if search:
            conditions.append(self._text_match(search))
        if year is not None and hasattr(self.model, "year"):
            conditions.append(self.model.year == year)

        stmt = self._order(select(self.model).where(*conditions), sort_by)
        result = await self.session.execute(stmt.offset(offset).limit(limit))
        items = list(result.scalars().all())

        total = await self._scalar_count(
            select(sql_count()).select_from(self.model).where(*conditions)
        )
        return items, total

    async def search(self, query: str, *, limit: int = 10) -> list[ContentModel]:
        """Approved items whose title or body matches, most viewed first."""
        result = await self.session.execute(
            select(self.model)
            .where(
                visibility_clause(self.model, None),
                self._text_match(query),
            )
            .order_by(self.model.view_count.desc(), self.model.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    # ═══════════════════════════════════════════════════════════════════════════
    # COUNTERS
    # ═══════════════════════════════════════════════════════════════════════════

    async def increment_view_count(self, item: ContentModel) -> None:
        """Atomic ``view_count = view_count + 1``, reflected on the instance."""
        await self.session.execute(
            update(self.model)
            .where(self.model.id == item.id)
            .values(view_count=self.model.view_count + 1)
            .execution_options(synchronize_session=False)
        )
        await self.session.refresh(item, attribute_names=["view_count", "updated_at"])

    async def set_vote_tallies(self, item: ContentModel, upvotes: int, downvotes: int) -> None:
        item.upvotes = upvotes
        item.downvotes = downvotes
        await self.session.flush()

    async def set_approval(self, item: ContentModel, is_approved: bool) -> ContentModel:
        item.is_approved = is_approved
        await self.session.flush()
        await self.session.refresh(item)
        return item

    async def replace_tags(self, item: ContentModel, tags: list[Tag]) -> None:
        item.tags = tags
        await self.session.flush()

    # ═══════════════════════════════════════════════════════════════════════════
    # DELETE
    # ═══════════════════════════════════════════════════════════════════════════

    async def delete_with_dependents(self, item: ContentModel) -> None:
        """Delete the item along with its comments, votes and bookmarks."""
        fk = f"{self.content_type.value}_id"
        for dependent in (Comment, Vote, Bookmark):
            await self.session.execute(
                delete(dependent).where(getattr(dependent, fk) == item.id)
            )
        await self.delete_instance(item)

    # ═══════════════════════════════════════════════════════════════════════════
    # AGGREGATES
    # ═══════════════════════════════════════════════════════════════════════════

    async def totals_for_user(self, user_id: UUID) -> dict[str, int]:
        """Count, views and votes received across a user's items."""
        return await self._totals(self.model.user_id == user_id)

    async def totals_for_category(self, category_id: UUID) -> dict[str, int]:
        """Count, views and votes across the approved items in a category."""
        return await self._totals(
            self.model.category_id == category_id,
            visibility_clause(self.model, None),
        )

    async def top(self, sort_field: str, *, limit: int = 10) -> list[ContentModel]:
        """
        Approved items ranked by ``sort_field`` ("view_count" or "upvotes").

        SQL Generated:
            SELECT * FROM notes WHERE is_approved
            ORDER BY view_count DESC, created_at DESC LIMIT ?
        """
        result = await self.session.execute(
            select(self.model)
            .where(visibility_clause(self.model, None))
            .order_by(getattr(self.model, sort_field).desc(), self.model.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def trending_since(self, since: datetime, *, limit: int = 10) -> list[ContentModel]:
        """Approved items created after ``since``, most viewed then most upvoted."""
        result = await self.session.execute(
            select(self.model)
            .where(
                visibility_clause(self.model, None),
                self.model.created_at >= since,
            )
            .order_by(self.model.view_count.desc(), self.model.upvotes.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def _totals(self, *conditions: ColumnElement[bool]) -> dict[str, int]:
        result = await self.session.execute(
            select(
                sql_count(self.model.id),
                func.coalesce(func.sum(self.model.view_count), 0),
                func.coalesce(func.sum(self.model.upvotes), 0),
                func.coalesce(func.sum(self.model.downvotes), 0),
            ).where(*conditions)
        )
        count, views, upvotes, downvotes = result.one()
        return {
            "count": int(count),
            "views": int(views),
            "upvotes": int(upvotes),
            "downvotes": int(downvotes),
        }

    async def count_pending(self) -> int:
        return await self.count(filters={"is_approved": False})

    # ═══════════════════════════════════════════════════════════════════════════
    # HELPERS
    # ═══════════════════════════════════════════════════════════════════════════

    def _text_match(self, text: str) -> ColumnElement[bool]:
        """Substring of title or content, or an exact tag name."""
        pattern = contains_pattern(text)
        return or_(
            func.lower(self.model.title).like(pattern, escape=LIKE_ESCAPE),
            func.lower(self.model.content).like(pattern, escape=LIKE_ESCAPE),
            self.model.tags.any(Tag.name == text.strip().lower()),
        )

    def _order(self, stmt: Select, sort_by: ContentSort) -> Select:
        if sort_by == ContentSort.POPULAR:
            return stmt.order_by(self.model.upvotes.desc(), self.model.created_at.desc())
        if sort_by == ContentSort.TRENDING:
            return stmt.order_by(self.model.view_count.desc(), self.model.created_at.desc())
        return stmt.order_by(self.model.created_at.desc())


class NoteRepository(ContentRepository[Note]):
    content_type = ContentType.NOTE

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Note, session)


class QuestionRepository(ContentRepository[Question]):
    content_type = ContentType.QUESTION

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Question, session)


def content_repository_for(content_type: ContentType, session: AsyncSession) -> Any:
    """Repository for a votable content type (NOTE or QUESTION)."""
    if content_type == ContentType.NOTE:
        return NoteRepository(session)
    if content_type == ContentType.QUESTION:
        return QuestionRepository(session)
    raise ValueError(f"{content_type.value} is not a note or question")
