"""
Statistics Service

Engagement numbers for single items, per-user and per-category totals,
rankings of the most viewed or upvoted content, and a platform overview
for moderators.

Formulas:
=========
    vote_ratio       = upvotes / (upvotes + downvotes) * 100, 2 decimals (0 if no votes)
    total_engagement = views + upvotes + downvotes + comments + bookmarks

Trending:
=========
    Approved items created in the last TRENDING_WINDOW, ranked by views then
    upvotes. Notes and questions are ranked separately.
"""

from dataclasses import asdict, dataclass
from datetime import timedelta
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.shared.core.exceptions import ValidationError
from studyhub.shared.models import ContentType, ReportStatus, User
from studyhub.shared.models.base import utcnow
from studyhub.shared.repositories import (
    BookmarkRepository,
    CategoryRepository,
    CommentRepository,
    GroupRepository,
    NoteRepository,
    QuestionRepository,
    ReportRepository,
    UserRepository,
    content_repository_for,
)
from studyhub.shared.services.common import RESOURCE_NAMES, parse_content_type, require_found


TOP_CRITERIA = {"views": "view_count", "upvotes": "upvotes"}

TRENDING_WINDOW = timedelta(days=7)


def vote_ratio(upvotes: int, downvotes: int) -> float:
    total = upvotes + downvotes
    if total == 0:
        return 0.0
    return round(upvotes / total * 100, 2)


@dataclass
class ContentStats:
    content_id: str
    content_type: str
    views: int
    upvotes: int
    downvotes: int
    vote_ratio: float
    comments: int
    bookmarks: int
    total_engagement: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class StatisticsService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.note_repo = NoteRepository(session)
        self.question_repo = QuestionRepository(session)
        self.comment_repo = CommentRepository(session)
        self.bookmark_repo = BookmarkRepository(session)

    async def content_stats(
        self,
        content_type: "ContentType | str",
        content_id: UUID,
        viewer: Optional[User],
    ) -> ContentStats:
        content_type = parse_content_type(content_type)
        item = require_found(
            await content_repository_for(content_type, self.session).get_visible(content_id, viewer),
            RESOURCE_NAMES[content_type],
            content_id,
        )
        comments = await self.comment_repo.count_for_target(content_type, item.id)
        bookmarks = await self.bookmark_repo.count_for_target(content_type, item.id)
        return ContentStats(
            content_id=str(item.id),
            content_type=content_type.value,
            views=item.view_count,
            upvotes=item.upvotes,
            downvotes=item.downvotes,
            vote_ratio=vote_ratio(item.upvotes, item.downvotes),
            comments=comments,
            bookmarks=bookmarks,
            total_engagement=item.view_count + item.upvotes + item.downvotes + comments + bookmarks,
        )

    async def user_stats(self, user_id: UUID) -> dict[str, Any]:
        user = require_found(await UserRepository(self.session).get(user_id), "User", user_id)
        notes = await self.note_repo.totals_for_user(user.id)
        questions = await self.question_repo.totals_for_user(user.id)
        upvotes = notes["upvotes"] + questions["upvotes"]
        downvotes = notes["downvotes"] + questions["downvotes"]
        return {
            "user_id": str(user.id),
            "notes": notes["count"],
            "questions": questions["count"],
            "comments": await self.comment_repo.count_by_user(user.id),
            "total_views": notes["views"] + questions["views"],
            "upvotes_received": upvotes,
            "downvotes_received": downvotes,
            "vote_ratio": vote_ratio(upvotes, downvotes),
        }

    async def overview(self) -> dict[str, Any]:
        """Platform-wide counters, for moderators."""
        return {
            "users": await UserRepository(self.session).count(),
            "notes": await self.note_repo.count(),
            "questions": await self.question_repo.count(),
            "pending_notes": await self.note_repo.count_pending(),
            "pending_questions": await self.question_repo.count_pending(),
            "comments": await self.comment_repo.count(),
            "groups": await GroupRepository(self.session).count(),
            "pending_reports": await ReportRepository(self.session).count(
                filters={"status": ReportStatus.PENDING}
            ),
        }

    # ═══════════════════════════════════════════════════════════════════════════
    # RANKINGS
    # ═══════════════════════════════════════════════════════════════════════════

    async def top_content(
        self,
        content_type: "ContentType | str",
        criteria: str = "views",
        limit: int = 10,
    ) -> list:
        """
        Most viewed or most upvoted approved items of one kind.

        Raises:
            ValidationError: Unknown content type or criteria
        """
        content_type = parse_content_type(content_type)
        if criteria not in TOP_CRITERIA:
            raise ValidationError(
                "Invalid criteria. Must be 'views' or 'upvotes'",
                details={"criteria": criteria},
            )
        repo = content_repository_for(content_type, self.session)
        return await repo.top(TOP_CRITERIA[criteria], limit=limit)

    async def trending(self, limit: int = 10) -> dict[str, list]:
        since = utcnow() - TRENDING_WINDOW
        return {
            "notes": await self.note_repo.trending_since(since, limit=limit),
            "questions": await self.question_repo.trending_since(since, limit=limit),
        }

    async def category_stats(self, category_id: UUID) -> dict[str, Any]:
        category = require_found(
            await CategoryRepository(self.session).get(category_id), "Category", category_id
        )
        notes = await self.note_repo.totals_for_category(category.id)
        questions = await self.question_repo.totals_for_category(category.id)
        return {
            "category_id": str(category.id),
            "name": category.name,
            "notes": notes,
            "questions": questions,
            "total_views": notes["views"] + questions["views"],
            "total_upvotes": notes["upvotes"] + questions["upvotes"],
        }
