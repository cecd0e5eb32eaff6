"""
Comment Handler

Editing and deleting comments. Comments are created and listed under
their note or question (``/notes/{id}/comments``, ``/questions/{id}/comments``).
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from studyhub.api.dependencies import CurrentUser
from studyhub.api.dependencies.services import get_comment_service
from studyhub.shared.schemas.comment import CommentResponse, CommentUpdate
from studyhub.shared.schemas.common import ApiResponse
from studyhub.shared.services.comment_service import CommentService


router = APIRouter()


@router.patch("/{comment_id}", response_model=ApiResponse[CommentResponse])
async def update_comment(
    comment_id: UUID,
    body: CommentUpdate,
    current_user: CurrentUser,
    comment_service: CommentService = Depends(get_comment_service),
):
    """
    Edit a comment. Owner only.

    Raises:
        404: Comment does not exist
        403: Caller did not write it
    """
    comment = await comment_service.update_comment(comment_id, current_user, body.content)
    return ApiResponse(
        message="Comment updated successfully",
        data=CommentResponse.model_validate(comment),
    )


@router.delete("/{comment_id}", response_model=ApiResponse[None])
async def delete_comment(
    comment_id: UUID,
    current_user: CurrentUser,
    comment_service: CommentService = Depends(get_comment_service),
):
    await comment_service.delete_comment(comment_id, current_user)
    return ApiResponse(message="Comment deleted successfully")
