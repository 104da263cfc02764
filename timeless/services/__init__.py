"""
Service layer for business logic
"""

from .brand_service import BrandService
from .watch_service import WatchService

__all__ = ["BrandService", "WatchService"]
