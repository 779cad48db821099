"""Plant-related models and schemas."""

from datetime import datetime
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field


class StockLevel(str, Enum):
    """Presentational stock band derived from availability."""
    HIGH = "High Stock"
    IN_STOCK = "In Stock"
    LOW = "Low Stock"
    LIMITED = "Limited"


def stock_level_for(availability: int) -> StockLevel:
    if availability > 100:
        return StockLevel.HIGH
    if availability > 50:
        return StockLevel.IN_STOCK
    if availability > 20:
        return StockLevel.LOW
    return StockLevel.LIMITED


class CategoryRef(BaseModel):
    """Category as embedded in a plant record."""
    id: str = Field(..., alias="_id")
    category: str
    description: Optional[str] = None

    class Config:
        populate_by_name = True


class PlantCreate(BaseModel):
    """Schema for adding a plant to the catalog (admin)."""
    name: str = Field(..., min_length=1, max_length=200)
    price: float = Field(default=0, ge=0)
    images: List[str] = Field(default_factory=list, description="Image URLs, in display order")
    category: str = Field(..., description="Category id")
    availability: int = Field(default=0, ge=0, description="Units in stock")
    instruction: List[str] = Field(default_factory=list, description="Care instructions")
    benefits: List[str] = Field(default_factory=list)


class PlantResponse(BaseModel):
    """A catalog plant with its category populated."""
    id: str = Field(..., alias="_id")
    name: str
    price: float
    images: List[str] = Field(default_factory=list)
    category: Optional[CategoryRef] = None  # None when the category was deleted
    availability: int
    instruction: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    stock_level: StockLevel = Field(..., alias="stockLevel")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    class Config:
        populate_by_name = True


class PlantDeleteResponse(BaseModel):
    message: str
