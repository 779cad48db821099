"""Pydantic schemas for catalog categories."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    """Request body for creating a category. Content rules live in the service."""
    category: Optional[str] = None
    description: Optional[str] = None


class CategorySummary(BaseModel):
    """Category projected to id and name (dropdowns, filters)."""
    id: str = Field(..., alias="_id")
    category: str

    class Config:
        populate_by_name = True


class CategoryResponse(CategorySummary):
    """Full category record."""
    description: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")


class MessageResponse(BaseModel):
    message: str
