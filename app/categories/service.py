"""Service layer for catalog categories."""

import logging
import re
from datetime import datetime, timezone
from typing import Any, List

from bson import ObjectId

from app.core.database import Database, CATEGORIES
from app.core.exceptions import BadRequestException, ConflictException, NotFoundException
from app.categories.schemas import CategoryResponse, CategorySummary

logger = logging.getLogger(__name__)

# Letters, digits, underscore, whitespace and , . - ! ' ’
ALLOWED_TEXT = re.compile(r"[A-Za-z0-9_\s,.\-!'’]+")

NAME_MIN, NAME_MAX = 3, 100
DESCRIPTION_MIN, DESCRIPTION_MAX = 30, 500


def validate_category_input(category: Any, description: Any) -> None:
    """
    Validate a create-category payload.

    Checks presence, then length, then allowed characters, raising
    BadRequestException with the first failure found.
    """
    if not category or not isinstance(category, str):
        raise BadRequestException("Category name is required and must be a string.")
    if not description or not isinstance(description, str):
        raise BadRequestException("Description is required and must be a string.")

    if not NAME_MIN <= len(category) <= NAME_MAX:
        raise BadRequestException(f"Category name must be {NAME_MIN}-{NAME_MAX} characters.")
    if not DESCRIPTION_MIN <= len(description) <= DESCRIPTION_MAX:
        raise BadRequestException(
            f"Description must be {DESCRIPTION_MIN}-{DESCRIPTION_MAX} characters."
        )

    if not ALLOWED_TEXT.fullmatch(category):
        raise BadRequestException("Category name contains invalid characters.")
    if not ALLOWED_TEXT.fullmatch(description):
        raise BadRequestException("Description contains invalid characters.")


def exact_name_query(name: str) -> dict:
    """Case-insensitive whole-name match, with the name taken literally."""
    return {"category": {"$regex": f"^{re.escape(name)}$", "$options": "i"}}


class CategoryService:
    """Category CRUD against the categories collection."""

    @staticmethod
    def get_collection():
        return Database.get_collection(CATEGORIES)

    @classmethod
    async def create_category(cls, category: Any, description: Any) -> CategoryResponse:
        """
        Validate and insert a category.

        One existence check followed by one insert. Two concurrent creates
        of the same name can both pass the check; the unique index then
        rejects the second insert with DuplicateKeyError (translated to 409).
        """
        validate_category_input(category, description)
        collection = cls.get_collection()

        existing = await collection.find_one(exact_name_query(category))
        if existing:
            raise ConflictException("Category already exists.")

        now = datetime.now(timezone.utc)
        doc = {
            "category": category,
            "description": description,
            "createdAt": now,
            "updatedAt": now,
        }
        result = await collection.insert_one(doc)
        doc["_id"] = result.inserted_id

        logger.info(f"Category created: {result.inserted_id}")
        return cls._doc_to_response(doc)

    @classmethod
    async def delete_category(cls, category_id: str) -> None:
        """
        Delete a category by id.

        Plants referencing it are left alone; their category populates as null.
        """
        if not ObjectId.is_valid(category_id):
            raise NotFoundException("Category not found")

        result = await cls.get_collection().delete_one({"_id": ObjectId(category_id)})
        if result.deleted_count == 0:
            raise NotFoundException("Category not found")

        logger.info(f"Category deleted: {category_id}")

    @classmethod
    async def list_categories(cls) -> List[CategorySummary]:
        """All categories, id and name only."""
        cursor = cls.get_collection().find({}, {"_id": 1, "category": 1})
        docs = await cursor.to_list(length=None)
        return [CategorySummary(id=str(d["_id"]), category=d["category"]) for d in docs]

    @classmethod
    async def exists(cls, category_id: ObjectId) -> bool:
        doc = await cls.get_collection().find_one({"_id": category_id}, {"_id": 1})
        return doc is not None

    @staticmethod
    def _doc_to_response(doc: dict) -> CategoryResponse:
        return CategoryResponse(
            id=str(doc["_id"]),
            category=doc["category"],
            description=doc.get("description"),
            created_at=doc.get("createdAt"),
            updated_at=doc.get("updatedAt"),
        )
