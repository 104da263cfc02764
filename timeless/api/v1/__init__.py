"""
API routers
"""

from fastapi import APIRouter

from .brands import router as brands_router
from .health import router as health_router
from .watches import router as watches_router

api_router = APIRouter()

# Include routers
api_router.include_router(health_router, tags=["health"])
api_router.include_router(brands_router, prefix="/brands", tags=["brands"])
api_router.include_router(watches_router, prefix="/watches", tags=["watches"])
