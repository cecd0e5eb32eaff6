"""
Report Handler

Users report notes, questions and comments; moderators review the queue.

Routes:
=======
    POST   /reports               file a report (one per user and item)
    GET    /reports/my            caller's own reports
    GET    /reports/all           every report              (moderator)
    PATCH  /reports/{id}/status   move a report along       (moderator)
    DELETE /reports/{id}          withdraw a report         (owner)
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from studyhub.api.dependencies import CurrentUser, ModeratorUser, Pagination
from studyhub.api.dependencies.services import get_report_service
from studyhub.shared.models.enums import ContentType, ReportStatus
from studyhub.shared.schemas.common import ApiResponse, PaginatedData
from studyhub.shared.schemas.report import ReportCreate, ReportResponse, ReportStatusUpdate
from studyhub.shared.services.report_service import ReportService


router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[ReportResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_report(
    body: ReportCreate,
    current_user: CurrentUser,
    report_service: ReportService = Depends(get_report_service),
):
    """
    Report a note, question or comment.

    Raises:
        400: Unknown content type, or the caller already reported this item
        404: The item does not exist
    """
    report = await report_service.create_report(
        current_user,
        body.content_type,
        body.content_id,
        body.reason,
        body.description,
    )
    return ApiResponse(
        message="Report submitted successfully",
        data=ReportResponse.model_validate(report),
    )


@router.get("/my", response_model=ApiResponse[PaginatedData[ReportResponse]])
async def list_my_reports(
    current_user: CurrentUser,
    pagination: Pagination,
    report_service: ReportService = Depends(get_report_service),
):
    page = await report_service.list_my_reports(
        current_user,
        page=pagination.page,
        limit=pagination.limit,
    )
    return ApiResponse(
        message="Reports retrieved successfully",
        data=PaginatedData.from_page(page, ReportResponse.model_validate),
    )


@router.get("/all", response_model=ApiResponse[PaginatedData[ReportResponse]])
async def list_all_reports(
    moderator: ModeratorUser,
    pagination: Pagination,
    status_filter: Optional[ReportStatus] = Query(None, alias="status"),
    content_type: Optional[ContentType] = None,
    report_service: ReportService = Depends(get_report_service),
):
    page = await report_service.list_reports(
        status=status_filter,
        content_type=content_type,
        page=pagination.page,
        limit=pagination.limit,
    )
    return ApiResponse(
        message="Reports retrieved successfully",
        data=PaginatedData.from_page(page, ReportResponse.model_validate),
    )


@router.patch("/{report_id}/status", response_model=ApiResponse[ReportResponse])
async def update_report_status(
    report_id: UUID,
    body: ReportStatusUpdate,
    moderator: ModeratorUser,
    report_service: ReportService = Depends(get_report_service),
):
    """Change a report's status. The reporter is notified."""
    report = await report_service.update_status(report_id, moderator, body.status)
    return ApiResponse(
        message="Report status updated successfully",
        data=ReportResponse.model_validate(report),
    )


@router.delete("/{report_id}", response_model=ApiResponse[None])
async def delete_report(
    report_id: UUID,
    current_user: CurrentUser,
    report_service: ReportService = Depends(get_report_service),
):
    await report_service.delete_report(report_id, current_user)
    return ApiResponse(message="Report deleted successfully")
