"""
Bearer token handling and the role-based authorization gate
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError as PydanticValidationError

from timeless.core.config import settings
from timeless.core.exceptions import AuthorizationError, UnauthorizedError
from timeless.core.logging import log


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


class Operation(str, Enum):
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


MUTATING_OPERATIONS = frozenset({Operation.CREATE, Operation.UPDATE, Operation.DELETE})


class TokenData(BaseModel):
    """Claims carried by an access token"""

    sub: str
    role: str = Role.USER.value
    exp: Optional[int] = None


def authorize(role: Optional[str], operation: Operation) -> bool:
    """
    Decide whether a caller with ``role`` may perform ``operation``.

    Reads are open to everyone, including anonymous callers (``role=None``).
    Mutations require the admin role.
    """
    if Operation(operation) not in MUTATING_OPERATIONS:
        return True
    return role == Role.ADMIN.value


def ensure_authorized(role: Optional[str], operation: Operation) -> None:
    """Raise AuthorizationError when the gate denies the operation"""
    if not authorize(role, operation):
        log.warning("Authorization denied", role=role, operation=Operation(operation).value)
        raise AuthorizationError("Not authorized as admin")


def create_access_token(subject: str, role: str = Role.USER.value, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a JWT carrying the subject and role claims"""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    payload = {"sub": subject, "role": role, "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> TokenData:
    """Verify a JWT and return its claims"""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        return TokenData(**payload)
    except (JWTError, PydanticValidationError) as e:
        log.warning("JWT validation failed", error=str(e))
        raise UnauthorizedError("Not authorized, token failed")
