"""Middleware: request timing and access logging."""

from __future__ import annotations

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("viewlint.api")


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """Report processing time in ``X-Request-Duration-Ms`` and the debug log."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.monotonic()
        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000
        response.headers["X-Request-Duration-Ms"] = f"{duration_ms:.1f}"
        logger.debug(
            "%s %s -> %d in %.1f ms",
            request.method, request.url.path, response.status_code, duration_ms,
        )
        return response
