"""
Store interface and its SQLModel-backed implementation
"""
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, Protocol, Type, TypeVar, Union
from uuid import UUID

from sqlalchemy import asc
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from timeless.core.exceptions import ConflictError, InternalError
from timeless.core.logging import log


ModelType = TypeVar("ModelType", bound=SQLModel)


def parse_id(id: Union[UUID, str, None]) -> Optional[UUID]:
    """Coerce an identifier to UUID; malformed input yields None"""
    if isinstance(id, UUID):
        return id
    if not isinstance(id, str):
        return None
    try:
        return UUID(id)
    except ValueError:
        return None


class Store(Protocol[ModelType]):
    """Persistence operations the services depend on"""

    async def find(self) -> List[ModelType]:
        ...

    async def find_by_id(self, id: Union[UUID, str]) -> Optional[ModelType]:
        ...

    async def create(self, data: Dict[str, Any]) -> ModelType:
        ...

    async def update(self, id: Union[UUID, str], changes: Dict[str, Any]) -> Optional[ModelType]:
        ...

    async def delete(self, id: Union[UUID, str]) -> bool:
        ...


class BaseRepository(Generic[ModelType]):
    """
    Generic repository implementing the Store operations over an AsyncSession.

    Lookups by a malformed identifier behave like lookups of a missing row.
    Database failures are logged and re-raised as InternalError so callers
    never see driver details.
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        self.model = model
        self.session = session

    async def find(self) -> List[ModelType]:
        """All records, oldest first"""
        try:
            statement = select(self.model).order_by(asc(self.model.created_at))
            result = await self.session.exec(statement)
            return list(result.all())
        except SQLAlchemyError as e:
            log.error(f"Database error listing {self.model.__name__}", error=str(e))
            raise InternalError()

    async def find_by_id(self, id: Union[UUID, str]) -> Optional[ModelType]:
        """Get a record by ID"""
        uuid = parse_id(id)
        if uuid is None:
            return None
        try:
            return await self.session.get(self.model, uuid)
        except SQLAlchemyError as e:
            log.error(f"Database error loading {self.model.__name__}", id=str(id), error=str(e))
            raise InternalError()

    async def create(self, data: Dict[str, Any]) -> ModelType:
        """Create a new record"""
        try:
            db_obj = self.model(**data)

            self.session.add(db_obj)
            await self.session.commit()
            await self.session.refresh(db_obj)

            log.info(f"Created {self.model.__name__}", id=str(db_obj.id))
            return db_obj

        except IntegrityError as e:
            await self.session.rollback()
            log.error(f"Integrity error creating {self.model.__name__}", error=str(e))
            raise ConflictError(f"Conflict creating {self.model.__name__}")
        except SQLAlchemyError as e:
            await self.session.rollback()
            log.error(f"Database error creating {self.model.__name__}", error=str(e))
            raise InternalError()

    async def update(self, id: Union[UUID, str], changes: Dict[str, Any]) -> Optional[ModelType]:
        """Apply ``changes`` to a record; None when it does not exist"""
        db_obj = await self.find_by_id(id)
        if db_obj is None:
            return None

        try:
            for field, value in changes.items():
                if hasattr(db_obj, field):
                    setattr(db_obj, field, value)

            if hasattr(db_obj, "updated_at"):
                db_obj.updated_at = datetime.now(timezone.utc)

            self.session.add(db_obj)
            await self.session.commit()
            await self.session.refresh(db_obj)

            log.info(f"Updated {self.model.__name__}", id=str(db_obj.id), fields=sorted(changes))
            return db_obj

        except IntegrityError as e:
            await self.session.rollback()
            log.error(f"Integrity error updating {self.model.__name__}", error=str(e))
            raise ConflictError(f"Conflict updating {self.model.__name__}")
        except SQLAlchemyError as e:
            await self.session.rollback()
            log.error(f"Database error updating {self.model.__name__}", error=str(e))
            raise InternalError()

    async def delete(self, id: Union[UUID, str]) -> bool:
        """Delete a record; False when it does not exist"""
        db_obj = await self.find_by_id(id)
        if db_obj is None:
            return False

        try:
            await self.session.delete(db_obj)
            await self.session.commit()

            log.info(f"Deleted {self.model.__name__}", id=str(id))
            return True

        except SQLAlchemyError as e:
            await self.session.rollback()
            log.error(f"Database error deleting {self.model.__name__}", error=str(e))
            raise InternalError()
