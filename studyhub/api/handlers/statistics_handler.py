"""
Statistics Handler

Engagement numbers for single items, contribution totals per user and
per category, top and trending rankings, and a platform overview for
moderators.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from studyhub.api.dependencies import ModeratorUser, OptionalUser
from studyhub.api.dependencies.services import get_statistics_service
from studyhub.shared.models.enums import ContentType
from studyhub.shared.schemas.common import ApiResponse
from studyhub.shared.schemas.content import NoteResponse, QuestionResponse
from studyhub.shared.schemas.search import (
    CategoryStatsResponse,
    ContentStatsResponse,
    OverviewResponse,
    TrendingResponse,
    UserStatsResponse,
)
from studyhub.shared.services.statistics_service import StatisticsService


router = APIRouter()


@router.get("/notes/{note_id}", response_model=ApiResponse[ContentStatsResponse])
async def note_stats(
    note_id: UUID,
    viewer: OptionalUser,
    statistics_service: StatisticsService = Depends(get_statistics_service),
):
    stats = await statistics_service.content_stats(ContentType.NOTE, note_id, viewer)
    return ApiResponse(
        message="Note statistics retrieved successfully",
        data=ContentStatsResponse(**stats.to_dict()),
    )


@router.get("/questions/{question_id}", response_model=ApiResponse[ContentStatsResponse])
async def question_stats(
    question_id: UUID,
    viewer: OptionalUser,
    statistics_service: StatisticsService = Depends(get_statistics_service),
):
    stats = await statistics_service.content_stats(ContentType.QUESTION, question_id, viewer)
    return ApiResponse(
        message="Question statistics retrieved successfully",
        data=ContentStatsResponse(**stats.to_dict()),
    )


@router.get("/users/{user_id}", response_model=ApiResponse[UserStatsResponse])
async def user_stats(
    user_id: UUID,
    statistics_service: StatisticsService = Depends(get_statistics_service),
):
    stats = await statistics_service.user_stats(user_id)
    return ApiResponse(
        message="User statistics retrieved successfully",
        data=UserStatsResponse(**stats),
    )


@router.get("/overview", response_model=ApiResponse[OverviewResponse])
async def overview(
    moderator: ModeratorUser,
    statistics_service: StatisticsService = Depends(get_statistics_service),
):
    stats = await statistics_service.overview()
    return ApiResponse(
        message="Platform statistics retrieved successfully",
        data=OverviewResponse(**stats),
    )


@router.get("/top/notes", response_model=ApiResponse[list[NoteResponse]])
async def top_notes(
    criteria: str = Query("views", description="views | upvotes"),
    limit: int = Query(10, ge=1, le=100),
    statistics_service: StatisticsService = Depends(get_statistics_service),
):
    notes = await statistics_service.top_content(ContentType.NOTE, criteria, limit)
    return ApiResponse(
        message="Top notes retrieved successfully",
        data=[NoteResponse.model_validate(n) for n in notes],
    )


@router.get("/top/questions", response_model=ApiResponse[list[QuestionResponse]])
async def top_questions(
    criteria: str = Query("views", description="views | upvotes"),
    limit: int = Query(10, ge=1, le=100),
    statistics_service: StatisticsService = Depends(get_statistics_service),
):
    questions = await statistics_service.top_content(ContentType.QUESTION, criteria, limit)
    return ApiResponse(
        message="Top questions retrieved successfully",
        data=[QuestionResponse.model_validate(q) for q in questions],
    )


@router.get("/trending", response_model=ApiResponse[TrendingResponse])
async def trending(
    limit: int = Query(10, ge=1, le=50),
    statistics_service: StatisticsService = Depends(get_statistics_service),
):
    """Approved notes and questions from the last week, most viewed first."""
    items = await statistics_service.trending(limit)
    return ApiResponse(
        message="Trending content retrieved successfully",
        data=TrendingResponse.from_items(items),
    )


@router.get("/categories/{category_id}", response_model=ApiResponse[CategoryStatsResponse])
async def category_stats(
    category_id: UUID,
    statistics_service: StatisticsService = Depends(get_statistics_service),
):
    stats = await statistics_service.category_stats(category_id)
    return ApiResponse(
        message="Category statistics retrieved successfully",
        data=CategoryStatsResponse(**stats),
    )
