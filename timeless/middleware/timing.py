"""
Request timing middleware
"""

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from timeless.core.config import settings
from timeless.core.logging import log


class TimingMiddleware(BaseHTTPMiddleware):
    """Add request timing to responses and flag slow requests"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()

        response = await call_next(request)

        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        response.headers["X-Process-Time"] = str(duration_ms)

        if duration_ms > settings.slow_request_ms:
            log.warning(
                "Slow request detected",
                method=request.method,
                path=request.url.path,
                duration_ms=duration_ms,
                status_code=response.status_code,
            )

        return response
