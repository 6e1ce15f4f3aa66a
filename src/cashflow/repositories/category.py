"""Category repository with title-based lookups."""
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cashflow.models.category import Category
from cashflow.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category model keyed by title."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Category)

    async def find_by_titles(self, titles: Iterable[str]) -> list[Category]:
        """Get every stored category whose title is in ``titles`` (one query)."""
        wanted = sorted(set(titles))
        if not wanted:
            return []
        result = await self.db.execute(select(Category).where(Category.title.in_(wanted)))
        return list(result.scalars().all())

    def build_many(self, titles: Iterable[str]) -> list[Category]:
        """Build unsaved categories, one per title."""
        return [Category(title=title) for title in titles]

    async def get_by_title(self, title: str) -> Category | None:
        """Find a category by its exact title."""
        result = await self.db.execute(select(Category).where(Category.title == title))
        return result.scalar_one_or_none()

    async def get_all_ordered(self) -> list[Category]:
        """Get all categories sorted by title."""
        result = await self.db.execute(select(Category).order_by(Category.title))
        return list(result.scalars().all())
