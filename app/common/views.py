"""Storefront read endpoints: category list, search, filter, autocomplete."""

from typing import List, Optional
from fastapi import APIRouter, Query

from app.core.config import get_settings
from app.categories.schemas import CategorySummary
from app.categories.service import CategoryService
from app.common.schemas import SearchResponse, Suggestion
from app.common.service import CatalogService, build_filter_query
from app.plants.models import PlantResponse

settings = get_settings()
router = APIRouter(prefix="/common", tags=["Catalog"])


@router.get("/categories", response_model=List[CategorySummary])
async def get_all_categories():
    """All categories as `{_id, category}`."""
    return await CategoryService.list_categories()


@router.get("/suggest", response_model=List[Suggestion])
async def get_suggestions(q: Optional[str] = Query(None, description="Partial plant or category name")):
    """
    Autocomplete hints for the search box.

    At most 7 entries, plant names before category names. Empty `q` returns `[]`.
    """
    return await CatalogService.get_suggestions(q)


@router.get("/filter", response_model=List[PlantResponse])
async def filter_plants(
    category: Optional[str] = Query(None, description="Category id"),
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    available: Optional[str] = Query(
        None, description="If present (any value), only plants in stock"
    ),
):
    """Plants matching every given filter. Not paginated."""
    query = build_filter_query(category, min_price, max_price, available)
    return await CatalogService.filter_plants(query)


@router.get("/search", response_model=SearchResponse)
async def search_plants(
    q: Optional[str] = Query(None, description="Text to find in plant or category names"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.SEARCH_DEFAULT_LIMIT, ge=1),
    category: Optional[str] = Query(None, description="Category id"),
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    available: Optional[str] = Query(None),
):
    """
    Paginated text search over plant names and category names.

    - **q**: required
    - **page** / **limit**: 1-based page, items per page (default 8)

    The optional filters narrow results the same way `/common/filter` does.
    """
    filters = build_filter_query(category, min_price, max_price, available)
    return await CatalogService.search_plants(q, page=page, limit=limit, filters=filters)
