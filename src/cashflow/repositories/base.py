"""Base repository with generic persistence operations."""
from typing import Generic, Sequence, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from cashflow.models.base import BaseModel

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """Generic repository providing common operations for any model."""

    def __init__(self, db: AsyncSession, model: Type[T]):
        self.db = db
        self.model = model

    async def create(self, obj: T) -> T:
        """Create a new record."""
        self.db.add(obj)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def save_all(self, objs: Sequence[T]) -> None:
        """Persist a batch of new records in a single commit.

        An empty batch does not touch the session.
        """
        if not objs:
            return
        self.db.add_all(objs)
        await self.db.commit()
