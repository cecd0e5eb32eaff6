"""
Search Handler

Global and per-type search. Only approved notes and questions and public
groups are ever returned.
"""

from fastapi import APIRouter, Depends, Query

from studyhub.api.dependencies.services import get_search_service
from studyhub.shared.schemas.common import ApiResponse
from studyhub.shared.schemas.content import NoteResponse, QuestionResponse
from studyhub.shared.schemas.group import GroupSummary
from studyhub.shared.schemas.search import SearchResponse
from studyhub.shared.schemas.user import UserSummary
from studyhub.shared.services.search_service import SearchService


router = APIRouter()


@router.get("", response_model=ApiResponse[SearchResponse])
async def search_all(
    q: str = Query(min_length=1, max_length=200, description="Text to match"),
    limit: int = Query(10, ge=1, le=50),
    search_service: SearchService = Depends(get_search_service),
):
    results = await search_service.search_all(q, limit=limit)
    return ApiResponse(
        message="Search results retrieved successfully",
        data=SearchResponse.from_results(results),
    )


@router.get("/notes", response_model=ApiResponse[list[NoteResponse]])
async def search_notes(
    q: str = Query(min_length=1, max_length=200, description="Text to match"),
    limit: int = Query(20, ge=1, le=100),
    search_service: SearchService = Depends(get_search_service),
):
    notes = await search_service.search_notes(q, limit=limit)
    return ApiResponse(
        message="Notes retrieved successfully",
        data=[NoteResponse.model_validate(n) for n in notes],
    )


@router.get("/questions", response_model=ApiResponse[list[QuestionResponse]])
async def search_questions(
    q: str = Query(min_length=1, max_length=200, description="Text to match"),
    limit: int = Query(20, ge=1, le=100),
    search_service: SearchService = Depends(get_search_service),
):
    questions = await search_service.search_questions(q, limit=limit)
    return ApiResponse(
        message="Questions retrieved successfully",
        data=[QuestionResponse.model_validate(x) for x in questions],
    )


@router.get("/groups", response_model=ApiResponse[list[GroupSummary]])
async def search_groups(
    q: str = Query(min_length=1, max_length=200, description="Text to match"),
    limit: int = Query(20, ge=1, le=100),
    search_service: SearchService = Depends(get_search_service),
):
    groups = await search_service.search_groups(q, limit=limit)
    return ApiResponse(
        message="Groups retrieved successfully",
        data=[GroupSummary.model_validate(g) for g in groups],
    )


@router.get("/users", response_model=ApiResponse[list[UserSummary]])
async def search_users(
    q: str = Query(min_length=1, max_length=200, description="Text to match"),
    limit: int = Query(20, ge=1, le=100),
    search_service: SearchService = Depends(get_search_service),
):
    users = await search_service.search_users(q, limit=limit)
    return ApiResponse(
        message="Users retrieved successfully",
        data=[UserSummary.model_validate(u) for u in users],
    )
