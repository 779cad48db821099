"""Plant service - handles catalog plant CRUD."""

import logging
from datetime import datetime, timezone
from typing import List
from bson import ObjectId

from app.core.database import Database, CATEGORIES, PLANTS
from app.core.exceptions import NotFoundException, BadRequestException
from app.categories.service import CategoryService
from app.plants.models import (
    CategoryRef,
    PlantCreate,
    PlantResponse,
    stock_level_for,
)

logger = logging.getLogger(__name__)


def category_lookup_stages() -> List[dict]:
    """
    Aggregation stages replacing a plant's category id with the category
    document. Plants whose category no longer exists are kept, without one.
    """
    return [
        {
            "$lookup": {
                "from": CATEGORIES,
                "localField": "category",
                "foreignField": "_id",
                "as": "category",
            }
        },
        {"$unwind": {"path": "$category", "preserveNullAndEmptyArrays": True}},
    ]


class PlantService:
    """Handles plant-related database operations."""

    @staticmethod
    def _get_plants_collection():
        return Database.get_collection(PLANTS)

    @staticmethod
    def _parse_plant_id(id_str: str) -> ObjectId:
        # Unknown and malformed ids are indistinguishable to the client
        if not ObjectId.is_valid(id_str):
            raise NotFoundException("Plant not found")
        return ObjectId(id_str)

    # ==================== Catalog CRUD ====================

    @classmethod
    async def list_plants(cls) -> List[PlantResponse]:
        """All plants, newest first."""
        pipeline = [{"$sort": {"_id": -1}}, *category_lookup_stages()]
        docs = await cls._get_plants_collection().aggregate(pipeline).to_list(length=None)
        return [cls.doc_to_response(d) for d in docs]

    @classmethod
    async def get_plant_by_id(cls, plant_id: str) -> PlantResponse:
        """Get a specific plant by ID."""
        object_id = cls._parse_plant_id(plant_id)
        pipeline = [{"$match": {"_id": object_id}}, *category_lookup_stages()]
        docs = await cls._get_plants_collection().aggregate(pipeline).to_list(length=1)

        if not docs:
            raise NotFoundException("Plant not found")

        return cls.doc_to_response(docs[0])

    @classmethod
    async def create_plant(cls, plant_data: PlantCreate) -> PlantResponse:
        """Add a plant to the catalog."""
        if not ObjectId.is_valid(plant_data.category):
            raise BadRequestException("Invalid category ID")
        category_id = ObjectId(plant_data.category)
        if not await CategoryService.exists(category_id):
            raise BadRequestException("Category does not exist.")

        now = datetime.now(timezone.utc)
        plant_doc = {
            "name": plant_data.name,
            "price": plant_data.price,
            "images": plant_data.images,
            "category": category_id,
            "availability": plant_data.availability,
            "instruction": plant_data.instruction,
            "benefits": plant_data.benefits,
            "createdAt": now,
            "updatedAt": now,
        }

        result = await cls._get_plants_collection().insert_one(plant_doc)
        logger.info(f"Plant created: {result.inserted_id}")

        return await cls.get_plant_by_id(str(result.inserted_id))

    @classmethod
    async def delete_plant(cls, plant_id: str) -> bool:
        """Delete a plant."""
        object_id = cls._parse_plant_id(plant_id)

        result = await cls._get_plants_collection().delete_one({"_id": object_id})
        if result.deleted_count == 0:
            raise NotFoundException("Plant not found")

        logger.info(f"Plant deleted: {plant_id}")
        return True

    # ==================== Helpers ====================

    @staticmethod
    def doc_to_response(doc: dict) -> PlantResponse:
        """Convert a plant document (category looked up) to PlantResponse."""
        category = doc.get("category")
        category_ref = None
        if isinstance(category, dict):
            category_ref = CategoryRef(
                id=str(category["_id"]),
                category=category.get("category", ""),
                description=category.get("description"),
            )

        availability = int(doc.get("availability", 0))
        return PlantResponse(
            id=str(doc["_id"]),
            name=doc["name"],
            price=doc.get("price", 0),
            images=doc.get("images") or [],
            category=category_ref,
            availability=availability,
            instruction=doc.get("instruction") or [],
            benefits=doc.get("benefits") or [],
            stock_level=stock_level_for(availability),
            created_at=doc.get("createdAt"),
            updated_at=doc.get("updatedAt"),
        )
