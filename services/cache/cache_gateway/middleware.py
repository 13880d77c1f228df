"""Request trace logging (method, path, status, latency)."""

import logging
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("uvicorn.error")


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Log one line per handled request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.perf_counter()
        status: int | str = "ERROR"
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.debug(
                f"{request.method} {request.url.path} status={status} "
                f"duration_ms={duration_ms:.1f}"
            )
