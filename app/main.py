"""
Plant Catalog API - Main application entry point.

Storefront and admin backend for a plant shop.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import get_settings
from app.core.database import Database
from app.core.error_handlers import register_exception_handlers
from app.core.middleware import MaxBodySizeMiddleware
from app.categories.views import router as categories_router
from app.common.views import router as common_router
from app.plants.views import router as plants_router

settings = get_settings()
API_PREFIX = "/api"

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events."""
    # Startup
    await Database.connect()
    yield
    # Shutdown
    await Database.disconnect()


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="""
## Plant Catalog API

Backend for the plant shop storefront and admin panel.

### Features

- 🌿 **Categories**: Create, list and delete plant categories
- 🪴 **Plants**: Browse, add and remove catalog plants
- 🔎 **Search**: Paginated search across plant and category names
- 🎚️ **Filters**: Category, price range and in-stock filters
- ⌨️ **Suggestions**: Autocomplete for the search box

    """,
    lifespan=lifespan,
    docs_url=f"{API_PREFIX}/docs",
    redoc_url=f"{API_PREFIX}/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(MaxBodySizeMiddleware)

register_exception_handlers(app)

# Include routers
routers = [
    categories_router,
    common_router,
    plants_router,
]

for router in routers:
    app.include_router(router, prefix=API_PREFIX)


@app.get("/", tags=["Health"])
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "database": "connected" if Database.db is not None else "disconnected",
        "version": settings.APP_VERSION,
    }
