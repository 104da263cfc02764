"""
API Schemas (Pydantic models for request/response)
"""

from .brand import BrandCreate, BrandRead
from .common import HealthCheckResponse, MessageResponse
from .watch import WatchCreate, WatchRead, WatchUpdate

__all__ = [
    # Brand
    "BrandCreate",
    "BrandRead",
    # Watch
    "WatchCreate",
    "WatchUpdate",
    "WatchRead",
    # Common
    "MessageResponse",
    "HealthCheckResponse",
]
