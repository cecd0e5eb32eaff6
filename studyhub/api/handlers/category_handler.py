"""
Category Handler

Subject categories for notes and questions. Anyone may read them; only
moderators change them.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from studyhub.api.dependencies import ModeratorUser
from studyhub.api.dependencies.services import get_category_service
from studyhub.shared.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from studyhub.shared.schemas.common import ApiResponse
from studyhub.shared.services.category_service import CategoryService


router = APIRouter()


@router.get("", response_model=ApiResponse[list[CategoryResponse]])
async def list_categories(
    category_service: CategoryService = Depends(get_category_service),
):
    categories = await category_service.list_categories()
    return ApiResponse(
        message="Categories retrieved successfully",
        data=[CategoryResponse.model_validate(c) for c in categories],
    )


@router.get("/{category_id}", response_model=ApiResponse[CategoryResponse])
async def get_category(
    category_id: UUID,
    category_service: CategoryService = Depends(get_category_service),
):
    category = await category_service.get_category(category_id)
    return ApiResponse(
        message="Category retrieved successfully",
        data=CategoryResponse.model_validate(category),
    )


@router.post(
    "",
    response_model=ApiResponse[CategoryResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    body: CategoryCreate,
    moderator: ModeratorUser,
    category_service: CategoryService = Depends(get_category_service),
):
    """
    Create a category.

    Raises:
        400: A category with this name (case-insensitive) already exists
    """
    category = await category_service.create_category(body.name, body.description)
    return ApiResponse(
        message="Category created successfully",
        data=CategoryResponse.model_validate(category),
    )


@router.patch("/{category_id}", response_model=ApiResponse[CategoryResponse])
async def update_category(
    category_id: UUID,
    body: CategoryUpdate,
    moderator: ModeratorUser,
    category_service: CategoryService = Depends(get_category_service),
):
    category = await category_service.update_category(
        category_id,
        name=body.name,
        description=body.description,
    )
    return ApiResponse(
        message="Category updated successfully",
        data=CategoryResponse.model_validate(category),
    )


@router.delete("/{category_id}", response_model=ApiResponse[None])
async def delete_category(
    category_id: UUID,
    moderator: ModeratorUser,
    category_service: CategoryService = Depends(get_category_service),
):
    await category_service.delete_category(category_id)
    return ApiResponse(message="Category deleted successfully")
