#!/usr/bin/env python3
"""
Seed script for the plant catalog.

Replaces the categories and plants collections with a small sample catalog
so the storefront has something to show. Plants reference categories by
ObjectId, so categories are inserted first.
"""

import asyncio
import os
import sys
from datetime import datetime, timezone

import certifi
from motor.motor_asyncio import AsyncIOMotorClient

# Make app package importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.config import get_settings
from app.core.database import CATEGORIES, PLANTS


CATEGORIES_SEED = [
    {
        "category": "Succulents",
        "description": "Thick-leaved plants that store water and thrive on bright light and little care.",
    },
    {
        "category": "Flowering Plants",
        "description": "Plants grown for their blooms, from roses to hibiscus, for sunny balconies.",
    },
    {
        "category": "Indoor Foliage",
        "description": "Leafy plants that tolerate low light and brighten up living rooms and offices.",
    },
]

PLANTS_SEED = [
    {
        "name": "Jade Plant",
        "category": "Succulents",
        "price": 249,
        "availability": 120,
        "images": ["https://res.cloudinary.com/demo/image/upload/jade.jpg"],
        "instruction": ["Water when soil is dry", "Keep in bright light"],
        "benefits": ["Low maintenance", "Long lived"],
    },
    {
        "name": "Aloe Vera",
        "category": "Succulents",
        "price": 199,
        "availability": 64,
        "images": ["https://res.cloudinary.com/demo/image/upload/aloe.jpg"],
        "instruction": ["Water every two weeks", "Use well-draining soil"],
        "benefits": ["Soothing gel for burns", "Air purifying"],
    },
    {
        "name": "Desert Rose",
        "category": "Flowering Plants",
        "price": 449,
        "availability": 25,
        "images": ["https://res.cloudinary.com/demo/image/upload/desert-rose.jpg"],
        "instruction": ["Full sun", "Water sparingly in winter"],
        "benefits": ["Showy pink flowers"],
    },
    {
        "name": "Hibiscus",
        "category": "Flowering Plants",
        "price": 299,
        "availability": 8,
        "images": ["https://res.cloudinary.com/demo/image/upload/hibiscus.jpg"],
        "instruction": ["Water daily in summer", "Feed monthly"],
        "benefits": ["Flowers year round"],
    },
    {
        "name": "Snake Plant",
        "category": "Indoor Foliage",
        "price": 349,
        "availability": 0,
        "images": ["https://res.cloudinary.com/demo/image/upload/snake.jpg"],
        "instruction": ["Low to bright indirect light", "Water monthly"],
        "benefits": ["Releases oxygen at night", "Hard to kill"],
    },
]


def get_client(uri: str) -> AsyncIOMotorClient:
    """Create Mongo client with TLS if needed."""
    client_kwargs = {}
    if "mongodb+srv://" in uri or "ssl=true" in uri.lower():
        client_kwargs["tlsCAFile"] = certifi.where()
    return AsyncIOMotorClient(uri, **client_kwargs)


async def seed_catalog():
    settings = get_settings()
    client = get_client(settings.MONGO_URI)
    db = client[settings.MONGO_DB_NAME]
    now = datetime.now(timezone.utc)

    # Replace existing data
    await db[PLANTS].delete_many({})
    await db[CATEGORIES].delete_many({})

    category_ids = {}
    for entry in CATEGORIES_SEED:
        result = await db[CATEGORIES].insert_one({**entry, "createdAt": now, "updatedAt": now})
        category_ids[entry["category"]] = result.inserted_id

    plant_docs = [
        {**plant, "category": category_ids[plant["category"]], "createdAt": now, "updatedAt": now}
        for plant in PLANTS_SEED
    ]
    await db[PLANTS].insert_many(plant_docs)

    print(f"Seeded {len(category_ids)} categories and {len(plant_docs)} plants")
    client.close()


if __name__ == "__main__":
    asyncio.run(seed_catalog())
