"""Core module - config, database, exceptions, error handlers."""

from app.core.config import get_settings, Settings
from app.core.database import Database
from app.core.error_handlers import register_exception_handlers
from app.core.exceptions import (
    AppException,
    NotFoundException,
    BadRequestException,
    ConflictException,
)

__all__ = [
    "get_settings",
    "Settings",
    "Database",
    "register_exception_handlers",
    "AppException",
    "NotFoundException",
    "BadRequestException",
    "ConflictException",
]
