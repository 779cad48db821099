"""Shared FastAPI middleware."""

from __future__ import annotations

from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response, JSONResponse

from app.core.config import get_settings

# Only admin writes (category and plant creation) carry a payload
BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


def _reject(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"success": False, "message": message}, status_code=status_code)


def _declared_length(request: Request) -> Optional[int]:
    raw = request.headers.get("content-length")
    if raw is None:
        return None
    return int(raw)


class MaxBodySizeMiddleware(BaseHTTPMiddleware):
    """
    Reject write requests whose body exceeds MAX_REQUEST_BODY_BYTES with 413.

    Storefront reads pass straight through. A declared Content-Length is
    trusted when present; otherwise the body is read and measured.
    """

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:
        if request.method not in BODY_METHODS:
            return await call_next(request)

        limit = int(get_settings().MAX_REQUEST_BODY_BYTES)
        try:
            declared = _declared_length(request)
        except ValueError:
            return _reject(400, "Invalid Content-Length header.")

        if declared is not None:
            if declared > limit:
                return _reject(413, "Payload too large.")
            return await call_next(request)

        # Chunked upload: Starlette caches request.body() for the handler
        body = await request.body()
        if len(body) > limit:
            return _reject(413, "Payload too large.")
        return await call_next(request)
