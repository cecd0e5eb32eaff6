"""
Group Handler

Study groups and their membership.

Permissions:
============
    create / join / leave / list / get     any authenticated user
    update / delete / roles / remove       group admin (403 otherwise)

Listing and detail accept an optional bearer so the response can tell the
caller whether they are a member and in what role.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from studyhub.api.dependencies import CurrentUser, OptionalUser, Pagination
from studyhub.api.dependencies.services import get_group_service
from studyhub.shared.models.enums import GroupType
from studyhub.shared.schemas.common import ApiResponse, PaginatedData
from studyhub.shared.schemas.group import (
    GroupCreate,
    GroupMemberResponse,
    GroupResponse,
    GroupUpdate,
    MemberRoleUpdate,
)
from studyhub.shared.services.group_service import GroupService


router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[GroupResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_group(
    body: GroupCreate,
    current_user: CurrentUser,
    group_service: GroupService = Depends(get_group_service),
):
    """Create a group. The creator becomes its first admin."""
    view = await group_service.create_group(current_user, **body.model_dump())
    return ApiResponse(
        message="Group created successfully",
        data=GroupResponse.from_view(view),
    )


@router.get("", response_model=ApiResponse[PaginatedData[GroupResponse]])
async def list_groups(
    viewer: OptionalUser,
    pagination: Pagination,
    group_type: Optional[GroupType] = None,
    category: Optional[str] = None,
    search: Optional[str] = Query(None, max_length=200),
    group_service: GroupService = Depends(get_group_service),
):
    page = await group_service.list_groups(
        viewer,
        group_type=group_type,
        category=category,
        search=search,
        page=pagination.page,
        limit=pagination.limit,
    )
    return ApiResponse(
        message="Groups retrieved successfully",
        data=PaginatedData.from_page(page, GroupResponse.from_view),
    )


@router.get("/my", response_model=ApiResponse[list[GroupResponse]])
async def list_my_groups(
    current_user: CurrentUser,
    group_service: GroupService = Depends(get_group_service),
):
    views = await group_service.list_my_groups(current_user)
    return ApiResponse(
        message="Groups retrieved successfully",
        data=[GroupResponse.from_view(v) for v in views],
    )


@router.get("/{group_id}", response_model=ApiResponse[GroupResponse])
async def get_group(
    group_id: UUID,
    viewer: OptionalUser,
    group_service: GroupService = Depends(get_group_service),
):
    view = await group_service.get_group(group_id, viewer)
    return ApiResponse(message="Group retrieved successfully", data=GroupResponse.from_view(view))


@router.patch("/{group_id}", response_model=ApiResponse[GroupResponse])
async def update_group(
    group_id: UUID,
    body: GroupUpdate,
    current_user: CurrentUser,
    group_service: GroupService = Depends(get_group_service),
):
    view = await group_service.update_group(
        group_id,
        current_user,
        **body.model_dump(exclude_unset=True),
    )
    return ApiResponse(message="Group updated successfully", data=GroupResponse.from_view(view))


@router.delete("/{group_id}", response_model=ApiResponse[None])
async def delete_group(
    group_id: UUID,
    current_user: CurrentUser,
    group_service: GroupService = Depends(get_group_service),
):
    await group_service.delete_group(group_id, current_user)
    return ApiResponse(message="Group deleted successfully")


# ═══════════════════════════════════════════════════════════════════════════════
# MEMBERSHIP
# ═══════════════════════════════════════════════════════════════════════════════


@router.post("/{group_id}/join", response_model=ApiResponse[GroupMemberResponse])
async def join_group(
    group_id: UUID,
    current_user: CurrentUser,
    group_service: GroupService = Depends(get_group_service),
):
    """
    Join a public group.

    Raises:
        400: Group is private, or the caller is already a member
        404: Group does not exist
    """
    member = await group_service.join_group(group_id, current_user)
    return ApiResponse(
        message="Joined group successfully",
        data=GroupMemberResponse.model_validate(member),
    )


@router.post("/{group_id}/leave", response_model=ApiResponse[None])
async def leave_group(
    group_id: UUID,
    current_user: CurrentUser,
    group_service: GroupService = Depends(get_group_service),
):
    """
    Leave a group. The last member leaving deletes it.

    Raises:
        400: Caller is not a member, or is the only admin of a group with other members
    """
    deleted = await group_service.leave_group(group_id, current_user)
    return ApiResponse(
        message="Left group successfully. Group deleted as you were the last member"
        if deleted
        else "Left group successfully",
    )


@router.get("/{group_id}/members", response_model=ApiResponse[list[GroupMemberResponse]])
async def list_members(
    group_id: UUID,
    group_service: GroupService = Depends(get_group_service),
):
    members = await group_service.list_members(group_id)
    return ApiResponse(
        message="Members retrieved successfully",
        data=[GroupMemberResponse.model_validate(m) for m in members],
    )


@router.patch(
    "/{group_id}/members/{user_id}/role",
    response_model=ApiResponse[GroupMemberResponse],
)
async def update_member_role(
    group_id: UUID,
    user_id: UUID,
    body: MemberRoleUpdate,
    current_user: CurrentUser,
    group_service: GroupService = Depends(get_group_service),
):
    member = await group_service.update_member_role(group_id, user_id, current_user, body.role)
    return ApiResponse(
        message="Member role updated successfully",
        data=GroupMemberResponse.model_validate(member),
    )


@router.delete("/{group_id}/members/{user_id}", response_model=ApiResponse[None])
async def remove_member(
    group_id: UUID,
    user_id: UUID,
    current_user: CurrentUser,
    group_service: GroupService = Depends(get_group_service),
):
    await group_service.remove_member(group_id, user_id, current_user)
    return ApiResponse(message="Member removed successfully")
