"""
Repository implementations
"""

from .base import BaseRepository, Store, parse_id
from .brand import BrandRepository
from .watch import WatchRepository

__all__ = [
    "BaseRepository",
    "Store",
    "parse_id",
    "BrandRepository",
    "WatchRepository",
]
