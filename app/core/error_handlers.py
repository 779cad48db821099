"""
Exception handlers that turn every failure into the uniform error envelope:

    {"success": false, "message": "...", "errors": [...], "stack": "..."}

`errors` is only present for validation failures and `stack` is only
present outside production.
"""

from __future__ import annotations

import json
import logging
import traceback
from typing import Any, Callable, List, Optional

from bson.errors import InvalidId
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings

logger = logging.getLogger(__name__)


def _format_stack(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def error_response(
    exc: BaseException,
    status_code: int,
    message: str,
    errors: Optional[List[dict]] = None,
) -> JSONResponse:
    """Build the error envelope for `exc`."""
    body: dict[str, Any] = {"success": False, "message": message}
    if errors is not None:
        body["errors"] = errors
    if not get_settings().is_production:
        body["stack"] = _format_stack(exc)

    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("Uncaught error", exc_info=(type(exc), exc, exc.__traceback__))

    headers = getattr(exc, "headers", None)
    return JSONResponse(body, status_code=status_code, headers=headers)


def _validation_errors(exc: RequestValidationError) -> List[dict]:
    errors = []
    for err in exc.errors():
        # Drop the "body"/"query" prefix so clients see the field name only
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({"field": ".".join(loc), "message": err.get("msg", "Invalid value")})
    return errors


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else json.dumps(exc.detail)
    return error_response(exc, exc.status_code, message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = _validation_errors(exc)
    message = ", ".join(
        f"{e['field']}: {e['message']}" if e["field"] else e["message"] for e in errors
    ) or "Invalid request"
    return error_response(exc, status.HTTP_400_BAD_REQUEST, message, errors=errors)


async def invalid_id_handler(request: Request, exc: InvalidId) -> JSONResponse:
    return error_response(exc, status.HTTP_400_BAD_REQUEST, f"Invalid id: {exc}")


async def duplicate_key_handler(request: Request, exc: DuplicateKeyError) -> JSONResponse:
    key_value = (exc.details or {}).get("keyValue")
    return error_response(
        exc,
        status.HTTP_409_CONFLICT,
        f"Duplicate key error: {json.dumps(key_value, default=str)}",
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    message = str(exc) or "Unknown error occurred"
    return error_response(exc, status.HTTP_500_INTERNAL_SERVER_ERROR, message)


async def catch_unhandled_errors(request: Request, call_next: Callable) -> Response:
    """
    Last-resort handler for errors no exception handler claimed.

    Answered here rather than by an `Exception` handler, which Starlette
    re-raises to the server; each 500 is logged once, in error_response.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        return await unhandled_exception_handler(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error envelope handlers to `app`."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(InvalidId, invalid_id_handler)
    app.add_exception_handler(DuplicateKeyError, duplicate_key_handler)
    app.middleware("http")(catch_unhandled_errors)
