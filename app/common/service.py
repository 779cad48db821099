"""
Catalog search, filtering and autocomplete.

All text matching is case-insensitive substring matching with the query
taken literally: user input is regex-escaped before it reaches MongoDB.
"""

from __future__ import annotations

import math
import re
from typing import List, Optional, Tuple, Union

from bson import ObjectId

from app.core.config import get_settings
from app.core.database import Database, CATEGORIES, PLANTS
from app.core.exceptions import BadRequestException
from app.common.schemas import Pagination, SearchResponse, Suggestion
from app.plants.service import PlantService, category_lookup_stages


def contains(text: str) -> dict:
    """Regex condition matching `text` anywhere, ignoring case."""
    return {"$regex": re.escape(text), "$options": "i"}


def parse_price(value: Union[str, float, None], name: str) -> Optional[float]:
    """Price bound from a query value; empty means no bound."""
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise BadRequestException(f"{name} must be a number.")


def build_filter_query(
    category: Optional[str] = None,
    min_price: Union[str, float, None] = None,
    max_price: Union[str, float, None] = None,
    available: Optional[str] = None,
) -> dict:
    """
    Conjunctive plant filter.

    `available` selects in-stock plants whenever it is given at all; its
    value is never inspected, so "false" and "" filter the same as "true".
    Empty price bounds are ignored.
    """
    query: dict = {}
    if category:
        if not ObjectId.is_valid(category):
            raise BadRequestException("Invalid category ID")
        query["category"] = ObjectId(category)

    price: dict = {}
    low = parse_price(min_price, "minPrice")
    high = parse_price(max_price, "maxPrice")
    if low is not None:
        price["$gte"] = low
    if high is not None:
        price["$lte"] = high
    if price:
        query["price"] = price

    if available is not None:
        query["availability"] = {"$gt": 0}
    return query


def build_pagination(page: int, limit: int, total: int) -> Pagination:
    return Pagination(
        current_page=page,
        total_pages=math.ceil(total / limit),
        total_items=total,
        items_per_page=limit,
    )


def page_window(page: int, limit: int) -> Tuple[int, int]:
    """(skip, limit) for a 1-based page number."""
    return (page - 1) * limit, limit


class CatalogService:
    """Read-side queries across plants and categories."""

    @staticmethod
    def _plants():
        return Database.get_collection(PLANTS)

    @staticmethod
    def _categories():
        return Database.get_collection(CATEGORIES)

    @classmethod
    async def search_plants(
        cls,
        q: Optional[str],
        page: int = 1,
        limit: Optional[int] = None,
        filters: Optional[dict] = None,
    ) -> SearchResponse:
        """
        Plants whose name or category name contains `q`, one page at a time.

        The page and the total are two separate reads of the same predicate,
        so a write landing between them can make them disagree slightly.
        """
        if not q or not isinstance(q, str):
            raise BadRequestException("Search query is required.")
        limit = limit or get_settings().SEARCH_DEFAULT_LIMIT

        pipeline: List[dict] = []
        if filters:
            pipeline.append({"$match": filters})
        pipeline += [
            {"$sort": {"_id": 1}},
            *category_lookup_stages(),
            {"$match": {"$or": [{"name": contains(q)}, {"category.category": contains(q)}]}},
        ]

        skip, limit = page_window(page, limit)
        page_cursor = cls._plants().aggregate(pipeline + [{"$skip": skip}, {"$limit": limit}])
        docs = await page_cursor.to_list(length=limit)

        count_cursor = cls._plants().aggregate(
            pipeline + [{"$group": {"_id": None, "total": {"$sum": 1}}}]
        )
        counted = await count_cursor.to_list(length=1)
        total = counted[0]["total"] if counted else 0

        return SearchResponse(
            plants=[PlantService.doc_to_response(d) for d in docs],
            pagination=build_pagination(page, limit, total),
        )

    @classmethod
    async def filter_plants(cls, query: dict) -> list:
        """All plants matching a query from build_filter_query. No paging."""
        pipeline = [{"$match": query}, {"$sort": {"_id": 1}}, *category_lookup_stages()]
        docs = await cls._plants().aggregate(pipeline).to_list(length=None)
        return [PlantService.doc_to_response(d) for d in docs]

    @classmethod
    async def get_suggestions(cls, q: Optional[str]) -> List[Suggestion]:
        """
        Up to N plant names and N category names containing `q`, plants
        first, cut to N overall. Enough plant hits leave no room for
        categories.
        """
        if not q:
            return []
        n = get_settings().SUGGESTION_LIMIT

        plant_cursor = cls._plants().find({"name": contains(q)}, {"name": 1}).limit(n)
        plants = await plant_cursor.to_list(length=n)
        category_cursor = cls._categories().find({"category": contains(q)}, {"category": 1}).limit(n)
        categories = await category_cursor.to_list(length=n)

        suggestions = [Suggestion(type="plant", value=p["name"]) for p in plants]
        suggestions += [Suggestion(type="category", value=c["category"]) for c in categories]
        return suggestions[:n]
