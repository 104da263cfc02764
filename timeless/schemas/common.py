"""
Common schemas used across the API
"""
from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain confirmation message"""
    message: str


class HealthCheckResponse(BaseModel):
    """Health check response"""
    status: str = "ok"
    timestamp: str
    version: str
    database: str = "unknown"
