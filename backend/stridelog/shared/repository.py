"""
Base repository for async SQLAlchemy access.

Feature repositories inherit lookups and flush-only writes from
BaseRepository; committing is left to the service layer. Read failures
surface as StorageError.

Usage:
    class AccountRepository(BaseRepository[Account]):
        def __init__(self, db: AsyncSession):
            super().__init__(db, Account)

        async def get_by_username(self, username: str) -> Account | None:
            return await self.get_by(username=username)
"""

import functools
from typing import TypeVar, Generic, Type
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from stridelog.shared.errors import StorageError

T = TypeVar("T")


def storage_errors(method):
    """Re-raise SQLAlchemy failures of an async repository method as StorageError."""

    @functools.wraps(method)
    async def wrapper(*args, **kwargs):
        try:
            return await method(*args, **kwargs)
        except SQLAlchemyError as e:
            raise StorageError(f"{method.__name__} failed: {e}") from e

    return wrapper


class BaseRepository(Generic[T]):
    """Lookups and pending writes for one mapped model."""

    def __init__(self, db: AsyncSession, model: Type[T]):
        self.db = db
        self.model = model

    @storage_errors
    async def get_by_id(self, id: int) -> T | None:
        """Row by primary key, or None."""
        result = await self.db.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    @storage_errors
    async def get_by(self, **filters) -> T | None:
        """
        Single row matching every `column=value` filter.

        Raises:
            StorageError: Read failed, or more than one row matched
        """
        query = select(self.model).filter_by(**filters)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def create(self, **values) -> T:
        """Add a row and flush it so the generated id is available."""
        entity = self.model(**values)
        self.db.add(entity)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def update(self, entity: T, **changes) -> T:
        """Apply `changes` to a loaded row and flush."""
        for name, value in changes.items():
            setattr(entity, name, value)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity
