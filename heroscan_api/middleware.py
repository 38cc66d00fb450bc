"""Request context middleware."""

from __future__ import annotations

import time
import uuid
from collections.abc import Awaitable, Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

CallNext = Callable[[Request], Awaitable[Response]]

REQUEST_ID_HEADER = "X-Request-ID"
EXTRACT_PREFIX = "/v1/extract/"

logger = structlog.get_logger(__name__)


def route_kind(path: str) -> str:
    """``extract`` for the extraction endpoints, ``service`` for everything else."""
    return "extract" if path.startswith(EXTRACT_PREFIX) else "service"


def _content_length(request: Request) -> int | None:
    value = request.headers.get("content-length", "")
    return int(value) if value.isdigit() else None


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Bind the request id and route kind to the log context.

    The id comes from ``X-Request-ID`` when the caller sends one and is echoed
    back on the response. One ``request_completed`` line is logged per
    request; extraction requests also carry the body size.
    """

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        kind = route_kind(request.url.path)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id, route_kind=kind)
        request.state.request_id = request_id

        start_time = time.perf_counter()
        response = await call_next(request)  # type: ignore[return-value]
        duration_ms = (time.perf_counter() - start_time) * 1000

        fields: dict[str, object] = {
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(duration_ms, 2),
        }
        if kind == "extract":
            fields["body_bytes"] = _content_length(request)
        logger.info("request_completed", **fields)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
