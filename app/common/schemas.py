"""Schemas for catalog search, filter and suggestions."""

from typing import List, Literal
from pydantic import BaseModel, Field

from app.plants.models import PlantResponse


class Suggestion(BaseModel):
    """Autocomplete hint tagged with the entity it came from."""
    type: Literal["plant", "category"]
    value: str


class Pagination(BaseModel):
    """One page of a larger result set."""
    current_page: int = Field(..., alias="currentPage")
    total_pages: int = Field(..., alias="totalPages")
    total_items: int = Field(..., alias="totalItems")
    items_per_page: int = Field(..., alias="itemsPerPage")

    class Config:
        populate_by_name = True


class SearchResponse(BaseModel):
    plants: List[PlantResponse]
    pagination: Pagination
