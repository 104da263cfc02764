"""
SQLModel database models
"""

from .brand import Brand
from .watch import Watch

__all__ = ["Brand", "Watch"]
