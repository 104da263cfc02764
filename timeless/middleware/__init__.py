"""
Middleware components for FastAPI
"""

from .request_context import RequestContextMiddleware
from .security import SecurityHeadersMiddleware
from .timing import TimingMiddleware

__all__ = ["RequestContextMiddleware", "TimingMiddleware", "SecurityHeadersMiddleware"]
