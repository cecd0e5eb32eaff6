"""
Upload Handler

Single and multi-file uploads to local storage. Files are served back from the
``/uploads`` static mount using the ``url`` in the response.

The body is read in one go, capped one byte past the configured limit so
an oversized upload is rejected without reading all of it.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from studyhub.api.dependencies import CurrentUser, Pagination
from studyhub.api.dependencies.services import get_upload_service
from studyhub.config.settings import settings
from studyhub.shared.schemas.common import ApiResponse, PaginatedData
from studyhub.shared.schemas.upload import UploadedFileResponse
from studyhub.shared.services.upload_service import UploadService


router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[UploadedFileResponse],
    status_code=status.HTTP_201_CREATED,
)
async def upload_file(
    current_user: CurrentUser,
    file: UploadFile = File(...),
    category: str = Form("general"),
    upload_service: UploadService = Depends(get_upload_service),
):
    """
    Upload one file.

    Raises:
        400: Empty file, file over MAX_UPLOAD_SIZE_BYTES, or unknown category
    """
    data = await file.read(settings.MAX_UPLOAD_SIZE_BYTES + 1)
    record = await upload_service.store(
        current_user,
        original_name=file.filename or "upload",
        data=data,
        mime_type=file.content_type,
        category=category,
    )
    return ApiResponse(
        message="File uploaded successfully",
        data=UploadedFileResponse.model_validate(record),
    )


@router.post(
    "/multiple",
    response_model=ApiResponse[list[UploadedFileResponse]],
    status_code=status.HTTP_201_CREATED,
)
async def upload_files(
    current_user: CurrentUser,
    files: list[UploadFile] = File(...),
    category: str = Form("general"),
    upload_service: UploadService = Depends(get_upload_service),
):
    """
    Upload up to MAX_FILES_PER_UPLOAD files into one category.

    Raises:
        400: Too many files, or any file failing the single-file checks
    """
    batch = [
        (
            upload.filename or "upload",
            await upload.read(settings.MAX_UPLOAD_SIZE_BYTES + 1),
            upload.content_type,
        )
        for upload in files
    ]
    records = await upload_service.store_many(current_user, batch, category=category)
    return ApiResponse(
        message=f"{len(records)} files uploaded successfully",
        data=[UploadedFileResponse.model_validate(r) for r in records],
    )


@router.get("", response_model=ApiResponse[PaginatedData[UploadedFileResponse]])
async def list_files(
    current_user: CurrentUser,
    pagination: Pagination,
    category: Optional[str] = None,
    upload_service: UploadService = Depends(get_upload_service),
):
    page = await upload_service.list_files(
        current_user,
        category=category,
        page=pagination.page,
        limit=pagination.limit,
    )
    return ApiResponse(
        message="Files retrieved successfully",
        data=PaginatedData.from_page(page, UploadedFileResponse.model_validate),
    )


@router.get("/{file_id}", response_model=ApiResponse[UploadedFileResponse])
async def get_file(
    file_id: UUID,
    current_user: CurrentUser,
    upload_service: UploadService = Depends(get_upload_service),
):
    record = await upload_service.get_file(file_id)
    return ApiResponse(
        message="File retrieved successfully",
        data=UploadedFileResponse.model_validate(record),
    )


@router.delete("/{file_id}", response_model=ApiResponse[None])
async def delete_file(
    file_id: UUID,
    current_user: CurrentUser,
    upload_service: UploadService = Depends(get_upload_service),
):
    await upload_service.delete_file(file_id, current_user)
    return ApiResponse(message="File deleted successfully")
