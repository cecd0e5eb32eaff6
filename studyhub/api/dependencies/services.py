"""
Service Dependencies

FastAPI dependencies for service injection.

Services are created per request with that request's db session. They hold
no other state, so nothing is shared between requests.

Usage:
======
    from studyhub.api.dependencies.services import get_vote_service

    @router.post("/{note_id}/vote")
    async def vote(
        note_id: UUID,
        body: VoteRequest,
        user: CurrentUser,
        vote_service: VoteService = Depends(get_vote_service),
    ):
        return await vote_service.cast_vote(user, "note", note_id, body.vote_type)
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.api.dependencies.database import get_db
from studyhub.shared.services import (
    AuthService,
    BookmarkService,
    CategoryService,
    CommentService,
    GroupChatService,
    GroupService,
    NoteService,
    NotificationService,
    ProfileService,
    QuestionService,
    ReportService,
    SearchService,
    StatisticsService,
    UploadService,
    VoteService,
)


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


async def get_note_service(db: AsyncSession = Depends(get_db)) -> NoteService:
    return NoteService(db)


async def get_question_service(db: AsyncSession = Depends(get_db)) -> QuestionService:
    return QuestionService(db)


async def get_vote_service(db: AsyncSession = Depends(get_db)) -> VoteService:
    return VoteService(db)


async def get_bookmark_service(db: AsyncSession = Depends(get_db)) -> BookmarkService:
    return BookmarkService(db)


async def get_comment_service(db: AsyncSession = Depends(get_db)) -> CommentService:
    return CommentService(db)


async def get_report_service(db: AsyncSession = Depends(get_db)) -> ReportService:
    return ReportService(db)


async def get_group_service(db: AsyncSession = Depends(get_db)) -> GroupService:
    return GroupService(db)


async def get_group_chat_service(db: AsyncSession = Depends(get_db)) -> GroupChatService:
    return GroupChatService(db)


async def get_notification_service(db: AsyncSession = Depends(get_db)) -> NotificationService:
    return NotificationService(db)


async def get_upload_service(db: AsyncSession = Depends(get_db)) -> UploadService:
    return UploadService(db)


async def get_profile_service(db: AsyncSession = Depends(get_db)) -> ProfileService:
    return ProfileService(db)


async def get_search_service(db: AsyncSession = Depends(get_db)) -> SearchService:
    return SearchService(db)


async def get_statistics_service(db: AsyncSession = Depends(get_db)) -> StatisticsService:
    return StatisticsService(db)


async def get_category_service(db: AsyncSession = Depends(get_db)) -> CategoryService:
    return CategoryService(db)
