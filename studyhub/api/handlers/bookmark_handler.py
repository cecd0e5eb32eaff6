"""
Bookmark Handler

Toggle, list and check bookmarks on notes and questions.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from studyhub.api.dependencies import CurrentUser, Pagination
from studyhub.api.dependencies.services import get_bookmark_service
from studyhub.shared.schemas.bookmark import (
    BookmarkResponse,
    BookmarkStatusResponse,
    BookmarkToggleRequest,
)
from studyhub.shared.schemas.common import ApiResponse, PaginatedData
from studyhub.shared.services.bookmark_service import BookmarkService


router = APIRouter()


@router.post("/toggle", response_model=ApiResponse[BookmarkStatusResponse])
async def toggle_bookmark(
    body: BookmarkToggleRequest,
    current_user: CurrentUser,
    bookmark_service: BookmarkService = Depends(get_bookmark_service),
):
    """
    Bookmark the item if it is not bookmarked, otherwise remove the bookmark.

    Raises:
        400: ``content_type`` is not "note" or "question"
        404: Item does not exist or is not visible
    """
    bookmarked = await bookmark_service.toggle(current_user, body.content_type, body.content_id)
    return ApiResponse(
        message="Bookmark added" if bookmarked else "Bookmark removed",
        data=BookmarkStatusResponse(bookmarked=bookmarked),
    )


@router.get("", response_model=ApiResponse[PaginatedData[BookmarkResponse]])
async def list_bookmarks(
    current_user: CurrentUser,
    pagination: Pagination,
    content_type: Optional[str] = Query(None, description='"note" or "question"'),
    bookmark_service: BookmarkService = Depends(get_bookmark_service),
):
    page = await bookmark_service.list_bookmarks(
        current_user,
        content_type=content_type,
        page=pagination.page,
        limit=pagination.limit,
    )
    return ApiResponse(
        message="Bookmarks retrieved successfully",
        data=PaginatedData.from_page(page, BookmarkResponse.model_validate),
    )


@router.get(
    "/check/{content_type}/{content_id}",
    response_model=ApiResponse[BookmarkStatusResponse],
)
async def check_bookmark(
    content_type: str,
    content_id: UUID,
    current_user: CurrentUser,
    bookmark_service: BookmarkService = Depends(get_bookmark_service),
):
    bookmarked = await bookmark_service.is_bookmarked(current_user, content_type, content_id)
    return ApiResponse(
        message="Bookmark status retrieved",
        data=BookmarkStatusResponse(bookmarked=bookmarked),
    )
