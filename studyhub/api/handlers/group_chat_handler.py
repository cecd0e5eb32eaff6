"""
Group Chat Handler

Messages inside a study group. Every route requires membership of the
group; editing and deleting also require being the sender.

Mounted under ``/groups`` next to the group handler:

    GET    /groups/{group_id}/messages          page 1 = most recent, oldest first
    POST   /groups/{group_id}/messages
    GET    /groups/{group_id}/messages/search?q=
    GET    /groups/{group_id}/messages/stats
    PATCH  /groups/messages/{message_id}
    DELETE /groups/messages/{message_id}        soft delete
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from studyhub.api.dependencies import CurrentUser, Pagination
from studyhub.api.dependencies.services import get_group_chat_service
from studyhub.shared.schemas.common import ApiResponse, PaginatedData
from studyhub.shared.schemas.group import (
    ChatStatsResponse,
    MessageCreate,
    MessageResponse,
    MessageUpdate,
)
from studyhub.shared.services.group_chat_service import GroupChatService


router = APIRouter()


@router.get(
    "/{group_id}/messages",
    response_model=ApiResponse[PaginatedData[MessageResponse]],
)
async def list_messages(
    group_id: UUID,
    current_user: CurrentUser,
    pagination: Pagination,
    chat_service: GroupChatService = Depends(get_group_chat_service),
):
    page = await chat_service.list_messages(
        group_id,
        current_user,
        page=pagination.page,
        limit=pagination.limit,
    )
    return ApiResponse(
        message="Messages retrieved successfully",
        data=PaginatedData.from_page(page, MessageResponse.model_validate),
    )


@router.post(
    "/{group_id}/messages",
    response_model=ApiResponse[MessageResponse],
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    group_id: UUID,
    body: MessageCreate,
    current_user: CurrentUser,
    chat_service: GroupChatService = Depends(get_group_chat_service),
):
    message = await chat_service.send_message(group_id, current_user, **body.model_dump())
    return ApiResponse(
        message="Message sent successfully",
        data=MessageResponse.model_validate(message),
    )


@router.get(
    "/{group_id}/messages/search",
    response_model=ApiResponse[list[MessageResponse]],
)
async def search_messages(
    group_id: UUID,
    current_user: CurrentUser,
    q: str = Query(min_length=1, max_length=200),
    chat_service: GroupChatService = Depends(get_group_chat_service),
):
    messages = await chat_service.search_messages(group_id, current_user, q)
    return ApiResponse(
        message="Messages retrieved successfully",
        data=[MessageResponse.model_validate(m) for m in messages],
    )


@router.get("/{group_id}/messages/stats", response_model=ApiResponse[ChatStatsResponse])
async def chat_stats(
    group_id: UUID,
    current_user: CurrentUser,
    chat_service: GroupChatService = Depends(get_group_chat_service),
):
    stats = await chat_service.chat_stats(group_id, current_user)
    return ApiResponse(
        message="Chat statistics retrieved successfully",
        data=ChatStatsResponse.from_stats(stats),
    )


@router.patch("/messages/{message_id}", response_model=ApiResponse[MessageResponse])
async def edit_message(
    message_id: UUID,
    body: MessageUpdate,
    current_user: CurrentUser,
    chat_service: GroupChatService = Depends(get_group_chat_service),
):
    message = await chat_service.edit_message(message_id, current_user, body.content)
    return ApiResponse(
        message="Message updated successfully",
        data=MessageResponse.model_validate(message),
    )


@router.delete("/messages/{message_id}", response_model=ApiResponse[MessageResponse])
async def delete_message(
    message_id: UUID,
    current_user: CurrentUser,
    chat_service: GroupChatService = Depends(get_group_chat_service),
):
    message = await chat_service.delete_message(message_id, current_user)
    return ApiResponse(
        message="Message deleted successfully",
        data=MessageResponse.model_validate(message),
    )
