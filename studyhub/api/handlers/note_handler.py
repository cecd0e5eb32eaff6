"""
Note Handler

Endpoints for notes: CRUD, listing, votes, comments and moderation.

Visibility:
===========
Listing and detail accept an optional bearer token. Anonymous callers see
approved notes only; ``include_unapproved=true`` adds the caller's own
pending notes, or every note for a moderator. A note the caller cannot see
answers 404 everywhere, including vote and comment routes.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from studyhub.api.dependencies import CurrentUser, ModeratorUser, OptionalUser, Pagination
from studyhub.api.dependencies.services import get_note_service, get_vote_service
from studyhub.shared.models.enums import ContentSort, ContentType
from studyhub.shared.schemas.comment import CommentCreate, CommentResponse
from studyhub.shared.schemas.common import ApiResponse, PaginatedData
from studyhub.shared.schemas.content import (
    ApprovalRequest,
    NoteCreate,
    NoteDetailResponse,
    NoteResponse,
    NoteUpdate,
    UserInteractionResponse,
    VoteRequest,
    VoteResultResponse,
)
from studyhub.shared.services.content_service import NoteService
from studyhub.shared.services.vote_service import VoteService


router = APIRouter()


def split_tags(tags: Optional[str]) -> Optional[list[str]]:
    """``"math, Physics"`` → ``["math", "physics"]``."""
    if not tags:
        return None
    return [t.strip().lower() for t in tags.split(",") if t.strip()] or None


@router.post(
    "",
    response_model=ApiResponse[NoteResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_note(
    body: NoteCreate,
    current_user: CurrentUser,
    note_service: NoteService = Depends(get_note_service),
):
    """
    Create a note owned by the caller.

    The note starts unapproved when moderation is enabled.
    """
    note = await note_service.create(current_user, **body.model_dump())
    return ApiResponse(
        message="Note created successfully",
        data=NoteResponse.model_validate(note),
    )


@router.get("", response_model=ApiResponse[PaginatedData[NoteResponse]])
async def list_notes(
    viewer: OptionalUser,
    pagination: Pagination,
    category_id: Optional[UUID] = None,
    user_id: Optional[UUID] = None,
    tags: Optional[str] = Query(None, description="Comma-separated tag names"),
    search: Optional[str] = Query(None, max_length=200),
    sort_by: ContentSort = ContentSort.RECENT,
    include_unapproved: bool = False,
    note_service: NoteService = Depends(get_note_service),
):
    page = await note_service.list(
        viewer,
        include_unapproved=include_unapproved,
        page=pagination.page,
        limit=pagination.limit,
        category_id=category_id,
        user_id=user_id,
        tags=split_tags(tags),
        search=search,
        sort_by=sort_by,
    )
    return ApiResponse(
        message="Notes retrieved successfully",
        data=PaginatedData.from_page(page, NoteResponse.model_validate),
    )


@router.get("/{note_id}", response_model=ApiResponse[NoteDetailResponse])
async def get_note(
    note_id: UUID,
    viewer: OptionalUser,
    note_service: NoteService = Depends(get_note_service),
):
    """
    Get one note and count the view.

    Authenticated callers also get ``user_interaction``: whether they
    bookmarked the note and their current vote.
    """
    note, interaction = await note_service.get_detail(note_id, viewer)
    response = NoteDetailResponse.model_validate(note)
    if interaction is not None:
        response.user_interaction = UserInteractionResponse.model_validate(interaction)
    return ApiResponse(message="Note retrieved successfully", data=response)


@router.patch("/{note_id}", response_model=ApiResponse[NoteResponse])
async def update_note(
    note_id: UUID,
    body: NoteUpdate,
    current_user: CurrentUser,
    note_service: NoteService = Depends(get_note_service),
):
    """
    Update a note. Owner only.

    Raises:
        404: Note does not exist
        403: Caller is not the owner
    """
    note = await note_service.update(note_id, current_user, **body.model_dump(exclude_unset=True))
    return ApiResponse(
        message="Note updated successfully",
        data=NoteResponse.model_validate(note),
    )


@router.delete("/{note_id}", response_model=ApiResponse[None])
async def delete_note(
    note_id: UUID,
    current_user: CurrentUser,
    note_service: NoteService = Depends(get_note_service),
):
    await note_service.delete(note_id, current_user)
    return ApiResponse(message="Note deleted successfully")


# ═══════════════════════════════════════════════════════════════════════════════
# VOTES
# ═══════════════════════════════════════════════════════════════════════════════


@router.post("/{note_id}/vote", response_model=ApiResponse[VoteResultResponse])
async def vote_note(
    note_id: UUID,
    body: VoteRequest,
    current_user: CurrentUser,
    vote_service: VoteService = Depends(get_vote_service),
):
    """
    Vote on a note.

    Same direction twice removes the vote; the opposite direction flips it.

    Raises:
        400: ``vote_type`` is not "upvote" or "downvote"
        404: Note does not exist or is not visible
    """
    result = await vote_service.cast_vote(current_user, ContentType.NOTE, note_id, body.vote_type)
    return ApiResponse(message=result.message, data=VoteResultResponse.model_validate(result))


# ═══════════════════════════════════════════════════════════════════════════════
# COMMENTS
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("/{note_id}/comments", response_model=ApiResponse[PaginatedData[CommentResponse]])
async def list_note_comments(
    note_id: UUID,
    viewer: OptionalUser,
    pagination: Pagination,
    note_service: NoteService = Depends(get_note_service),
):
    page = await note_service.list_comments(
        note_id,
        viewer,
        page=pagination.page,
        limit=pagination.limit,
    )
    return ApiResponse(
        message="Comments retrieved successfully",
        data=PaginatedData.from_page(page, CommentResponse.model_validate),
    )


@router.post(
    "/{note_id}/comments",
    response_model=ApiResponse[CommentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_note_comment(
    note_id: UUID,
    body: CommentCreate,
    current_user: CurrentUser,
    note_service: NoteService = Depends(get_note_service),
):
    comment = await note_service.add_comment(note_id, current_user, body.content)
    return ApiResponse(
        message="Comment added successfully",
        data=CommentResponse.model_validate(comment),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# MODERATION
# ═══════════════════════════════════════════════════════════════════════════════


@router.patch("/{note_id}/approval", response_model=ApiResponse[NoteResponse])
async def set_note_approval(
    note_id: UUID,
    body: ApprovalRequest,
    moderator: ModeratorUser,
    note_service: NoteService = Depends(get_note_service),
):
    """Approve or unapprove a note. Moderators only; the owner is notified."""
    note = await note_service.set_approval(note_id, moderator, body.is_approved)
    return ApiResponse(
        message="Note approved successfully" if note.is_approved else "Note unapproved successfully",
        data=NoteResponse.model_validate(note),
    )
