"""API routes for catalog categories."""

from fastapi import APIRouter, status

from app.categories.schemas import CategoryCreate, CategoryResponse, MessageResponse
from app.categories.service import CategoryService

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(payload: CategoryCreate):
    """
    Create a new category.

    - **category**: 3-100 characters, unique (case-insensitive)
    - **description**: 30-500 characters

    Both fields accept letters, digits, whitespace and `, . - ! '`.
    Returns 400 on invalid input and 409 if the name is taken.
    """
    return await CategoryService.create_category(payload.category, payload.description)


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(category_id: str):
    """Delete a category by id. Plants in it keep their (now dangling) reference."""
    await CategoryService.delete_category(category_id)
    return MessageResponse(message="Category deleted")
