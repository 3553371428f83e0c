"""Category API endpoints."""

import uuid

from fastapi import APIRouter, Depends, status

from todoapi.api.dependencies import get_category_repository
from todoapi.errors import NotFoundError
from todoapi.repositories import CategoryRepository
from todoapi.schemas.category import CategoryInput, CategoryResponse

router = APIRouter(prefix="/categories", tags=["categories"])

CATEGORY_NOT_FOUND = "Category not found"


@router.get("", response_model=list[CategoryResponse], response_model_exclude_none=True)
async def list_categories(
    categories: CategoryRepository = Depends(get_category_repository),
):
    """List all categories, oldest first."""
    return [CategoryResponse.model_validate(c) for c in await categories.get_all()]


@router.post(
    "",
    response_model=CategoryResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    data: CategoryInput,
    categories: CategoryRepository = Depends(get_category_repository),
):
    """Create a new category."""
    category = await categories.create(data.to_new())
    return CategoryResponse.model_validate(category)


@router.get("/{category_id}", response_model=CategoryResponse, response_model_exclude_none=True)
async def get_category(
    category_id: uuid.UUID,
    categories: CategoryRepository = Depends(get_category_repository),
):
    """Get a category by ID."""
    category = await categories.get_by_id(category_id)
    return CategoryResponse.model_validate(category)


@router.put("/{category_id}", response_model=CategoryResponse, response_model_exclude_none=True)
async def update_category(
    category_id: uuid.UUID,
    data: CategoryInput,
    categories: CategoryRepository = Depends(get_category_repository),
):
    """Replace a category's name, and its description and color when supplied."""
    if not await categories.exists(category_id):
        raise NotFoundError(CATEGORY_NOT_FOUND)
    category = await categories.update(category_id, data.to_changes())
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: uuid.UUID,
    categories: CategoryRepository = Depends(get_category_repository),
):
    """Delete a category; its todos are kept without a category."""
    if not await categories.exists(category_id):
        raise NotFoundError(CATEGORY_NOT_FOUND)
    await categories.delete(category_id)
