"""
Application configuration using Pydantic Settings.
Loads from environment variables / .env file.
"""

from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    APP_NAME: str = "Plant Catalog API"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"  # "production" hides stack traces
    LOG_LEVEL: str = "INFO"

    # MongoDB
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "plant_catalog"

    # HTTP
    CORS_ORIGINS: List[str] = ["*"]
    MAX_REQUEST_BODY_BYTES: int = 1_000_000

    # Catalog
    SEARCH_DEFAULT_LIMIT: int = 8
    SUGGESTION_LIMIT: int = 7

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.strip().lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
