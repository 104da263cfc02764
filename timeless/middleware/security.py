"""
Security headers middleware
"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from timeless.core.config import settings


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to responses"""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        if request.url.path.startswith(settings.api_prefix):
            response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"

        return response
