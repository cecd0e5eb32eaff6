"""
Notification Handler

The caller's in-app notification inbox.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from studyhub.api.dependencies import CurrentUser, Pagination
from studyhub.api.dependencies.services import get_notification_service
from studyhub.shared.schemas.common import ApiResponse, CountResponse, PaginatedData
from studyhub.shared.schemas.notification import NotificationResponse
from studyhub.shared.services.notification_service import NotificationService


router = APIRouter()


@router.get("", response_model=ApiResponse[PaginatedData[NotificationResponse]])
async def list_notifications(
    current_user: CurrentUser,
    pagination: Pagination,
    unread_only: bool = False,
    notification_service: NotificationService = Depends(get_notification_service),
):
    page = await notification_service.list_notifications(
        current_user,
        unread_only=unread_only,
        page=pagination.page,
        limit=pagination.limit,
    )
    return ApiResponse(
        message="Notifications retrieved successfully",
        data=PaginatedData.from_page(page, NotificationResponse.model_validate),
    )


@router.get("/unread-count", response_model=ApiResponse[CountResponse])
async def unread_count(
    current_user: CurrentUser,
    notification_service: NotificationService = Depends(get_notification_service),
):
    count = await notification_service.unread_count(current_user)
    return ApiResponse(message="Unread count retrieved", data=CountResponse(count=count))


@router.patch("/read-all", response_model=ApiResponse[CountResponse])
async def mark_all_read(
    current_user: CurrentUser,
    notification_service: NotificationService = Depends(get_notification_service),
):
    count = await notification_service.mark_all_read(current_user)
    return ApiResponse(
        message="All notifications marked as read",
        data=CountResponse(count=count),
    )


@router.patch("/{notification_id}/read", response_model=ApiResponse[NotificationResponse])
async def mark_read(
    notification_id: UUID,
    current_user: CurrentUser,
    notification_service: NotificationService = Depends(get_notification_service),
):
    notification = await notification_service.mark_read(notification_id, current_user)
    return ApiResponse(
        message="Notification marked as read",
        data=NotificationResponse.model_validate(notification),
    )


@router.delete("", response_model=ApiResponse[CountResponse])
async def delete_all_notifications(
    current_user: CurrentUser,
    notification_service: NotificationService = Depends(get_notification_service),
):
    count = await notification_service.delete_all(current_user)
    return ApiResponse(message="All notifications deleted", data=CountResponse(count=count))


@router.delete("/{notification_id}", response_model=ApiResponse[None])
async def delete_notification(
    notification_id: UUID,
    current_user: CurrentUser,
    notification_service: NotificationService = Depends(get_notification_service),
):
    await notification_service.delete_notification(notification_id, current_user)
    return ApiResponse(message="Notification deleted successfully")
