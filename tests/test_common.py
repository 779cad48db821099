"""
tests/test_common.py - Search, filter, suggestions and pagination.
"""

import math

import pytest
from bson import ObjectId

from app.common.service import (
    build_filter_query,
    build_pagination,
    contains,
    page_window,
    parse_price,
)
from app.core.exceptions import BadRequestException


# ==================== Query building ====================

def test_contains_escapes_user_text():
    assert contains("a.b(c") == {"$regex": r"a\.b\(c", "$options": "i"}


def test_filter_query_empty():
    assert build_filter_query() == {}


def test_filter_query_all_clauses():
    category_id = str(ObjectId())
    query = build_filter_query(category_id, 10, 50, "1")
    assert query == {
        "category": ObjectId(category_id),
        "price": {"$gte": 10, "$lte": 50},
        "availability": {"$gt": 0},
    }


@pytest.mark.parametrize("available", ["true", "false", "0", ""])
def test_available_presence_gates_clause(available):
    assert build_filter_query(available=available) == {"availability": {"$gt": 0}}


def test_zero_min_price_still_applied():
    assert build_filter_query(min_price=0) == {"price": {"$gte": 0}}


def test_filter_query_rejects_malformed_category():
    with pytest.raises(BadRequestException):
        build_filter_query(category="not-an-id")


@pytest.mark.parametrize("raw, expected", [(None, None), ("", None), ("12.5", 12.5), ("0", 0.0), (30, 30.0)])
def test_parse_price(raw, expected):
    assert parse_price(raw, "minPrice") == expected


def test_parse_price_rejects_text():
    with pytest.raises(BadRequestException) as exc_info:
        parse_price("cheap", "maxPrice")
    assert exc_info.value.detail == "maxPrice must be a number."


def test_page_window():
    assert page_window(1, 8) == (0, 8)
    assert page_window(3, 5) == (10, 5)


@pytest.mark.parametrize("total, limit", [(0, 8), (1, 8), (8, 8), (9, 8), (5, 2), (100, 7)])
def test_total_pages_is_ceiling(total, limit):
    pagination = build_pagination(1, limit, total)
    assert pagination.total_pages == math.ceil(total / limit)
    assert pagination.items_per_page == limit


# ==================== GET /api/common/search ====================

@pytest.fixture
def rose_catalog(make_category, make_plant):
    flowers = make_category("Flowering Plants")
    herbs = make_category("Kitchen Herbs")
    for i in range(1, 6):
        make_plant(f"Rose {i}", flowers)
    make_plant("Tulip", flowers)
    make_plant("Rosemary", herbs)
    return flowers, herbs


def test_search_second_page(client, make_category, make_plant):
    flowers = make_category("Flowering Plants")
    for i in range(1, 6):
        make_plant(f"Rose {i}", flowers)
    make_plant("Tulip", flowers)

    r = client.get("/api/common/search", params={"q": "rose", "page": 2, "limit": 2})
    assert r.status_code == 200
    data = r.json()
    assert [p["name"] for p in data["plants"]] == ["Rose 3", "Rose 4"]
    assert data["pagination"] == {
        "currentPage": 2,
        "totalPages": 3,
        "totalItems": 5,
        "itemsPerPage": 2,
    }


def test_search_defaults(client, rose_catalog):
    r = client.get("/api/common/search", params={"q": "ROSE"})
    assert r.status_code == 200
    data = r.json()
    # "Rosemary" contains "rose" too
    assert data["pagination"] == {
        "currentPage": 1,
        "totalPages": 1,
        "totalItems": 6,
        "itemsPerPage": 8,
    }
    assert data["plants"][0]["category"]["category"] == "Flowering Plants"


def test_search_matches_category_name(client, rose_catalog):
    r = client.get("/api/common/search", params={"q": "herbs"})
    assert r.status_code == 200
    assert [p["name"] for p in r.json()["plants"]] == ["Rosemary"]


def test_search_page_past_end(client, rose_catalog):
    r = client.get("/api/common/search", params={"q": "rose", "page": 10, "limit": 2})
    assert r.status_code == 200
    data = r.json()
    assert data["plants"] == []
    assert data["pagination"]["totalItems"] == 6
    assert data["pagination"]["totalPages"] == 3


def test_search_no_matches(client, rose_catalog):
    r = client.get("/api/common/search", params={"q": "cactus"})
    assert r.json()["pagination"] == {
        "currentPage": 1,
        "totalPages": 0,
        "totalItems": 0,
        "itemsPerPage": 8,
    }


def test_search_query_is_literal(client, make_category, make_plant):
    category_id = make_category("Ferns and Mosses")
    make_plant("Fern (Boston)", category_id)
    make_plant("Maidenhair Fern", category_id)

    r = client.get("/api/common/search", params={"q": "(boston"})
    assert [p["name"] for p in r.json()["plants"]] == ["Fern (Boston)"]

    r = client.get("/api/common/search", params={"q": ".*"})
    assert r.json()["pagination"]["totalItems"] == 0


@pytest.mark.parametrize("params", [{}, {"q": ""}])
def test_search_requires_query(client, params):
    r = client.get("/api/common/search", params=params)
    assert r.status_code == 400
    assert r.json()["message"] == "Search query is required."


@pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"page": "two"}])
def test_search_rejects_bad_paging(client, params):
    r = client.get("/api/common/search", params={"q": "rose", **params})
    assert r.status_code == 400


def test_search_limit_has_no_upper_cap(client, make_category, make_plant):
    flowers = make_category("Flowering Plants")
    for i in range(1, 4):
        make_plant(f"Rose {i}", flowers)

    r = client.get("/api/common/search", params={"q": "rose", "limit": 101})
    assert r.status_code == 200
    data = r.json()
    assert len(data["plants"]) == 3
    assert data["pagination"] == {
        "currentPage": 1,
        "totalPages": 1,
        "totalItems": 3,
        "itemsPerPage": 101,
    }


def test_search_with_filters(client, make_category, make_plant):
    flowers = make_category("Flowering Plants")
    make_plant("Rose Red", flowers, price=100, availability=0)
    make_plant("Rose White", flowers, price=300, availability=4)
    make_plant("Rose Pink", flowers, price=500, availability=9)

    r = client.get(
        "/api/common/search",
        params={"q": "rose", "maxPrice": 400, "available": "false"},
    )
    assert [p["name"] for p in r.json()["plants"]] == ["Rose White"]


def test_search_keeps_plants_with_deleted_category(client, make_category, make_plant):
    flowers = make_category("Flowering Plants")
    make_plant("Rose 1", flowers)
    client.delete(f"/api/categories/{flowers}")

    r = client.get("/api/common/search", params={"q": "rose"})
    [plant] = r.json()["plants"]
    assert plant["category"] is None


# ==================== GET /api/common/filter ====================

@pytest.fixture
def priced_catalog(make_category, make_plant):
    succulents = make_category("Succulents")
    flowers = make_category("Flowering Plants")
    make_plant("Jade Plant", succulents, price=150, availability=0)
    make_plant("Aloe Vera", succulents, price=250, availability=12)
    make_plant("Hibiscus", flowers, price=350, availability=30)
    return succulents, flowers


def test_filter_without_params_returns_everything(client, priced_catalog):
    r = client.get("/api/common/filter")
    assert r.status_code == 200
    assert [p["name"] for p in r.json()] == ["Jade Plant", "Aloe Vera", "Hibiscus"]


def test_filter_by_category(client, priced_catalog):
    succulents, _ = priced_catalog
    r = client.get("/api/common/filter", params={"category": succulents})
    assert [p["name"] for p in r.json()] == ["Jade Plant", "Aloe Vera"]


def test_filter_by_price_range(client, priced_catalog):
    r = client.get("/api/common/filter", params={"minPrice": 200, "maxPrice": 350})
    assert [p["name"] for p in r.json()] == ["Aloe Vera", "Hibiscus"]


def test_filter_empty_price_bounds_are_ignored(client, priced_catalog):
    r = client.get("/api/common/filter", params={"minPrice": "", "maxPrice": ""})
    assert r.status_code == 200
    assert [p["name"] for p in r.json()] == ["Jade Plant", "Aloe Vera", "Hibiscus"]


def test_search_empty_price_bounds_are_ignored(client, priced_catalog):
    # "a" hits Hibiscus through its category, Flowering Plants
    r = client.get("/api/common/search", params={"q": "a", "minPrice": "", "maxPrice": ""})
    assert r.status_code == 200
    assert r.json()["pagination"]["totalItems"] == 3


@pytest.mark.parametrize("value", ["true", "false", ""])
def test_filter_available_by_presence(client, priced_catalog, value):
    r = client.get("/api/common/filter", params={"available": value})
    assert [p["name"] for p in r.json()] == ["Aloe Vera", "Hibiscus"]


def test_filter_combined(client, priced_catalog):
    succulents, _ = priced_catalog
    r = client.get(
        "/api/common/filter",
        params={"category": succulents, "minPrice": 100, "available": "1"},
    )
    assert [p["name"] for p in r.json()] == ["Aloe Vera"]


def test_filter_bad_inputs(client):
    assert client.get("/api/common/filter", params={"category": "nope"}).status_code == 400
    r = client.get("/api/common/filter", params={"minPrice": "cheap"})
    assert r.status_code == 400
    assert r.json()["message"] == "minPrice must be a number."


# ==================== GET /api/common/suggest ====================

@pytest.mark.parametrize("params", [{}, {"q": ""}])
def test_suggest_empty_query(client, params):
    r = client.get("/api/common/suggest", params=params)
    assert r.status_code == 200
    assert r.json() == []


def test_suggest_plants_before_categories(client, make_category, make_plant):
    palms = make_category("Palm Trees")
    make_plant("Areca Palm", palms)
    make_plant("Fan Palm", palms)

    r = client.get("/api/common/suggest", params={"q": "PALM"})
    assert r.json() == [
        {"type": "plant", "value": "Areca Palm"},
        {"type": "plant", "value": "Fan Palm"},
        {"type": "category", "value": "Palm Trees"},
    ]


def test_suggest_plants_can_crowd_out_categories(client, make_category, make_plant):
    palms = make_category("Palm Trees")
    for i in range(9):
        make_plant(f"Palm {i}", palms)

    r = client.get("/api/common/suggest", params={"q": "palm"})
    data = r.json()
    assert len(data) == 7
    assert all(s["type"] == "plant" for s in data)


def test_suggest_query_is_literal(client, make_category, make_plant):
    category_id = make_category("Succulents")
    make_plant("Aloe Vera", category_id)

    r = client.get("/api/common/suggest", params={"q": "a.*"})
    assert r.json() == []
