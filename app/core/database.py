"""
MongoDB database connection and utilities.
"""

import logging

import certifi
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from app.core.config import get_settings

logger = logging.getLogger(__name__)

CATEGORIES = "categories"
PLANTS = "plants"

# Case-insensitive comparison for the category name unique index
CASE_INSENSITIVE = {"locale": "en", "strength": 2}


def _client_kwargs(uri: str) -> dict:
    """TLS CA bundle for Atlas-style URIs."""
    if "mongodb+srv://" in uri or "ssl=true" in uri.lower() or "tls=true" in uri.lower():
        return {"tlsCAFile": certifi.where()}
    return {}


class Database:
    """MongoDB database connection manager."""

    client: AsyncIOMotorClient = None
    db: AsyncIOMotorDatabase = None

    @classmethod
    async def connect(cls):
        """Connect to MongoDB."""
        settings = get_settings()
        cls.client = AsyncIOMotorClient(settings.MONGO_URI, **_client_kwargs(settings.MONGO_URI))
        cls.db = cls.client[settings.MONGO_DB_NAME]

        # Create indexes
        await cls._create_indexes()

        logger.info(f"Connected to MongoDB: {settings.MONGO_DB_NAME}")

    @classmethod
    async def disconnect(cls):
        """Disconnect from MongoDB."""
        if cls.client:
            cls.client.close()
            cls.client = None
            cls.db = None
            logger.info("Disconnected from MongoDB")

    @classmethod
    async def _create_indexes(cls):
        """Create database indexes for uniqueness and lookups."""
        # Categories: unique name, compared case-insensitively
        await cls.db[CATEGORIES].create_index(
            "category",
            unique=True,
            collation=CASE_INSENSITIVE,
            name="category_name_unique",
        )

        # Plants collection
        await cls.db[PLANTS].create_index("category")
        await cls.db[PLANTS].create_index("name")

    @classmethod
    def get_collection(cls, name: str):
        """Get a collection by name."""
        return cls.db[name]
