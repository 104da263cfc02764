"""
Request context middleware
"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette_context import context

from timeless.core.logging import log


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind the request and correlation IDs to every log line of the request"""

    async def dispatch(self, request: Request, call_next):
        request_id = context.get("X-Request-ID") if context.exists() else None
        correlation_id = context.get("X-Correlation-ID") if context.exists() else None

        # Add to request state
        request.state.request_id = request_id

        with log.contextualize(request_id=request_id, correlation_id=correlation_id):
            return await call_next(request)
