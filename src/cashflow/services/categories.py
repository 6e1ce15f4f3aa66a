"""Category reconciliation for import batches."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from cashflow.models.category import Category
from cashflow.repositories.category import CategoryRepository

logger = logging.getLogger(__name__)


@dataclass
class CategoryReconciliation:
    """Outcome of reconciling one batch of category names."""

    categories: dict[str, Category] = field(default_factory=dict)
    created: list[Category] = field(default_factory=list)


class CategoryReconciler:
    """Resolve category names to stored categories, creating the missing ones.

    Every distinct name maps to exactly one Category: names already stored are
    reused and each missing name is created once, however often it repeats.
    """

    def __init__(self, category_repo: CategoryRepository):
        self.category_repo = category_repo

    async def reconcile(self, names: Sequence[str]) -> CategoryReconciliation:
        """Map every name in ``names`` to a Category.

        Args:
            names: Category names in row order; duplicates and "" allowed

        Returns:
            CategoryReconciliation with the title -> Category mapping and the
            categories created for this batch
        """
        if not names:
            return CategoryReconciliation()

        existing = await self.category_repo.find_by_titles(set(names))
        resolved: dict[str, Category] = {category.title: category for category in existing}

        # First occurrence wins; dict keys keep insertion order.
        missing = list(dict.fromkeys(name for name in names if name not in resolved))

        created: list[Category] = []
        if missing:
            created = self.category_repo.build_many(missing)
            await self.category_repo.save_all(created)
            resolved.update((category.title, category) for category in created)

        logger.info(
            "Categories reconciled",
            extra={"categories_count": len(resolved), "created_count": len(created)},
        )
        return CategoryReconciliation(categories=resolved, created=created)
