"""
Custom exceptions for the application
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette_context import context

from timeless.core.config import settings
from timeless.core.logging import log


class BaseAPIException(HTTPException):
    """Base exception for API errors"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "Internal server error"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, detail: Optional[str] = None, headers: Optional[Dict[str, str]] = None, **kwargs):
        super().__init__(status_code=self.status_code, detail=detail or self.detail, headers=headers or self.headers)
        # Store any additional context
        self.context = kwargs


class ValidationError(BaseAPIException):
    """Malformed, missing or out-of-enum input"""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Validation error"


class UnauthorizedError(BaseAPIException):
    """No usable credentials"""

    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Not authorized"
    headers = {"WWW-Authenticate": "Bearer"}


class AuthorizationError(BaseAPIException):
    """Authenticated but the role is insufficient"""

    status_code = status.HTTP_403_FORBIDDEN
    detail = "Not authorized as admin"


class NotFoundError(BaseAPIException):
    """Resource not found"""

    status_code = status.HTTP_404_NOT_FOUND
    detail = "Resource not found"


class ConflictError(BaseAPIException):
    """Conflict with existing resource"""

    status_code = status.HTTP_409_CONFLICT
    detail = "Resource conflict"


class InternalError(BaseAPIException):
    """Store or infrastructure failure"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Internal server error"


# Error response model for OpenAPI documentation
class ErrorResponse(BaseModel):
    """Standard error response"""

    message: str
    type: str
    context: Dict[str, Any] = {}
    request_id: Optional[str] = None
    timestamp: str


def _error_body(message: str, error_type: str, error_context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    request_id = context.get("X-Request-ID") if context.exists() else None
    return {
        "message": message,
        "type": error_type,
        "context": error_context or {},
        "request_id": request_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# Exception handlers
async def handle_api_exception(request: Request, exc: BaseAPIException) -> JSONResponse:
    """Handle API exceptions with structured response"""
    if exc.status_code >= 500:
        log.error("Request failed", path=request.url.path, error=exc.detail)

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail, exc.__class__.__name__, exc.context),
        headers=exc.headers,
    )


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report unparseable request bodies as validation errors"""
    errors = [{"loc": list(err.get("loc", ())), "msg": err.get("msg")} for err in exc.errors()]
    return JSONResponse(
        status_code=ValidationError.status_code,
        content=_error_body("Invalid request body", ValidationError.__name__, {"errors": errors}),
    )


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions"""
    log.opt(exception=exc).error("Unexpected error", path=request.url.path)

    # Don't expose internal errors in production
    detail = str(exc) if settings.debug else "An unexpected error occurred"

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(detail, InternalError.__name__),
    )
