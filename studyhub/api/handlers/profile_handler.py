"""
Profile Handler

The caller's own account under ``/profile/me`` and public profiles of
other users under ``/profile/{user_id}``.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from studyhub.api.dependencies import CurrentUser, Pagination
from studyhub.api.dependencies.services import get_profile_service
from studyhub.shared.models.enums import ContentType
from studyhub.shared.schemas.common import ApiResponse, PaginatedData
from studyhub.shared.schemas.content import NoteResponse, QuestionResponse
from studyhub.shared.schemas.user import (
    AvatarUpdate,
    ChangePasswordRequest,
    DeleteAccountRequest,
    ProfileUpdate,
    PublicProfileResponse,
    UserResponse,
)
from studyhub.shared.services.profile_service import ProfileService


router = APIRouter()


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_my_profile(current_user: CurrentUser):
    return ApiResponse(
        message="Profile retrieved successfully",
        data=UserResponse.model_validate(current_user),
    )


@router.patch("/me", response_model=ApiResponse[UserResponse])
async def update_my_profile(
    payload: ProfileUpdate,
    current_user: CurrentUser,
    profile_service: ProfileService = Depends(get_profile_service),
):
    user = await profile_service.update_profile(
        current_user,
        full_name=payload.full_name,
        bio=payload.bio,
    )
    return ApiResponse(
        message="Profile updated successfully",
        data=UserResponse.model_validate(user),
    )


@router.patch("/me/avatar", response_model=ApiResponse[UserResponse])
async def update_my_avatar(
    payload: AvatarUpdate,
    current_user: CurrentUser,
    profile_service: ProfileService = Depends(get_profile_service),
):
    """Point the avatar at a URL, typically one returned by ``POST /uploads``."""
    user = await profile_service.update_avatar(current_user, payload.avatar)
    return ApiResponse(
        message="Avatar updated successfully",
        data=UserResponse.model_validate(user),
    )


@router.post("/me/change-password", response_model=ApiResponse[None])
async def change_password(
    payload: ChangePasswordRequest,
    current_user: CurrentUser,
    profile_service: ProfileService = Depends(get_profile_service),
):
    """
    Raises:
        400: Current password is incorrect
    """
    await profile_service.change_password(
        current_user,
        payload.current_password,
        payload.new_password,
    )
    return ApiResponse(message="Password changed successfully")


@router.get("/me/content", response_model=ApiResponse[PaginatedData])
async def list_my_content(
    current_user: CurrentUser,
    pagination: Pagination,
    kind: str = Query("notes", alias="type", description="notes | questions"),
    profile_service: ProfileService = Depends(get_profile_service),
):
    """The caller's notes or questions, including ones still awaiting approval."""
    content_type, page = await profile_service.list_my_content(
        current_user,
        kind,
        page=pagination.page,
        limit=pagination.limit,
    )
    schema = NoteResponse if content_type == ContentType.NOTE else QuestionResponse
    return ApiResponse(
        message="Content retrieved successfully",
        data=PaginatedData.from_page(page, schema.model_validate),
    )


@router.delete("/me", response_model=ApiResponse[None])
async def delete_my_account(
    payload: DeleteAccountRequest,
    current_user: CurrentUser,
    profile_service: ProfileService = Depends(get_profile_service),
):
    """
    Raises:
        400: Password is incorrect
    """
    await profile_service.delete_account(current_user, payload.password)
    return ApiResponse(message="Account deleted successfully")


@router.get("/{user_id}", response_model=ApiResponse[PublicProfileResponse])
async def get_public_profile(
    user_id: UUID,
    profile_service: ProfileService = Depends(get_profile_service),
):
    profile = await profile_service.get_public_profile(user_id)
    return ApiResponse(
        message="Profile retrieved successfully",
        data=PublicProfileResponse(
            id=profile.user.id,
            full_name=profile.user.full_name,
            avatar=profile.user.avatar,
            bio=profile.user.bio,
            created_at=profile.user.created_at,
            notes=profile.notes,
            questions=profile.questions,
        ),
    )
