"""
Question Handler

Endpoints for past exam questions. Same surface as notes, plus a ``year``
filter on the listing.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from studyhub.api.dependencies import CurrentUser, ModeratorUser, OptionalUser, Pagination
from studyhub.api.dependencies.services import get_question_service, get_vote_service
from studyhub.api.handlers.note_handler import split_tags
from studyhub.shared.models.enums import ContentSort, ContentType
from studyhub.shared.schemas.comment import CommentCreate, CommentResponse
from studyhub.shared.schemas.common import ApiResponse, PaginatedData
from studyhub.shared.schemas.content import (
    ApprovalRequest,
    QuestionCreate,
    QuestionDetailResponse,
    QuestionResponse,
    QuestionUpdate,
    UserInteractionResponse,
    VoteRequest,
    VoteResultResponse,
)
from studyhub.shared.services.content_service import QuestionService
from studyhub.shared.services.vote_service import VoteService


router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[QuestionResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_question(
    body: QuestionCreate,
    current_user: CurrentUser,
    question_service: QuestionService = Depends(get_question_service),
):
    question = await question_service.create(current_user, **body.model_dump())
    return ApiResponse(
        message="Question created successfully",
        data=QuestionResponse.model_validate(question),
    )


@router.get("", response_model=ApiResponse[PaginatedData[QuestionResponse]])
async def list_questions(
    viewer: OptionalUser,
    pagination: Pagination,
    category_id: Optional[UUID] = None,
    user_id: Optional[UUID] = None,
    year: Optional[int] = Query(None, ge=1900, le=2200),
    tags: Optional[str] = Query(None, description="Comma-separated tag names"),
    search: Optional[str] = Query(None, max_length=200),
    sort_by: ContentSort = ContentSort.RECENT,
    include_unapproved: bool = False,
    question_service: QuestionService = Depends(get_question_service),
):
    page = await question_service.list(
        viewer,
        include_unapproved=include_unapproved,
        page=pagination.page,
        limit=pagination.limit,
        category_id=category_id,
        user_id=user_id,
        tags=split_tags(tags),
        search=search,
        year=year,
        sort_by=sort_by,
    )
    return ApiResponse(
        message="Questions retrieved successfully",
        data=PaginatedData.from_page(page, QuestionResponse.model_validate),
    )


@router.get("/{question_id}", response_model=ApiResponse[QuestionDetailResponse])
async def get_question(
    question_id: UUID,
    viewer: OptionalUser,
    question_service: QuestionService = Depends(get_question_service),
):
    question, interaction = await question_service.get_detail(question_id, viewer)
    response = QuestionDetailResponse.model_validate(question)
    if interaction is not None:
        response.user_interaction = UserInteractionResponse.model_validate(interaction)
    return ApiResponse(message="Question retrieved successfully", data=response)


@router.patch("/{question_id}", response_model=ApiResponse[QuestionResponse])
async def update_question(
    question_id: UUID,
    body: QuestionUpdate,
    current_user: CurrentUser,
    question_service: QuestionService = Depends(get_question_service),
):
    question = await question_service.update(
        question_id,
        current_user,
        **body.model_dump(exclude_unset=True),
    )
    return ApiResponse(
        message="Question updated successfully",
        data=QuestionResponse.model_validate(question),
    )


@router.delete("/{question_id}", response_model=ApiResponse[None])
async def delete_question(
    question_id: UUID,
    current_user: CurrentUser,
    question_service: QuestionService = Depends(get_question_service),
):
    await question_service.delete(question_id, current_user)
    return ApiResponse(message="Question deleted successfully")


@router.post("/{question_id}/vote", response_model=ApiResponse[VoteResultResponse])
async def vote_question(
    question_id: UUID,
    body: VoteRequest,
    current_user: CurrentUser,
    vote_service: VoteService = Depends(get_vote_service),
):
    result = await vote_service.cast_vote(
        current_user,
        ContentType.QUESTION,
        question_id,
        body.vote_type,
    )
    return ApiResponse(message=result.message, data=VoteResultResponse.model_validate(result))


@router.get(
    "/{question_id}/comments",
    response_model=ApiResponse[PaginatedData[CommentResponse]],
)
async def list_question_comments(
    question_id: UUID,
    viewer: OptionalUser,
    pagination: Pagination,
    question_service: QuestionService = Depends(get_question_service),
):
    page = await question_service.list_comments(
        question_id,
        viewer,
        page=pagination.page,
        limit=pagination.limit,
    )
    return ApiResponse(
        message="Comments retrieved successfully",
        data=PaginatedData.from_page(page, CommentResponse.model_validate),
    )


@router.post(
    "/{question_id}/comments",
    response_model=ApiResponse[CommentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_question_comment(
    question_id: UUID,
    body: CommentCreate,
    current_user: CurrentUser,
    question_service: QuestionService = Depends(get_question_service),
):
    comment = await question_service.add_comment(question_id, current_user, body.content)
    return ApiResponse(
        message="Comment added successfully",
        data=CommentResponse.model_validate(comment),
    )


@router.patch("/{question_id}/approval", response_model=ApiResponse[QuestionResponse])
async def set_question_approval(
    question_id: UUID,
    body: ApprovalRequest,
    moderator: ModeratorUser,
    question_service: QuestionService = Depends(get_question_service),
):
    question = await question_service.set_approval(question_id, moderator, body.is_approved)
    return ApiResponse(
        message=(
            "Question approved successfully"
            if question.is_approved
            else "Question unapproved successfully"
        ),
        data=QuestionResponse.model_validate(question),
    )
