"""Unit tests for CategoryReconciler."""

from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest

from cashflow.models.category import Category
from cashflow.repositories.category import CategoryRepository
from cashflow.services.categories import CategoryReconciler


def make_category(title: str) -> Category:
    return Category(id=uuid4(), title=title)


@pytest.fixture
def category_repo():
    """Repository mock whose build_many returns real, unsaved categories."""
    repo = Mock(spec=CategoryRepository)
    repo.find_by_titles = AsyncMock(return_value=[])
    repo.build_many = Mock(side_effect=lambda titles: [Category(title=t) for t in titles])
    repo.save_all = AsyncMock()
    return repo


class TestCategoryReconciler:
    """Test suite for CategoryReconciler."""

    async def test_empty_input_touches_nothing(self, category_repo):
        result = await CategoryReconciler(category_repo).reconcile([])

        assert result.categories == {}
        assert result.created == []
        category_repo.find_by_titles.assert_not_awaited()
        category_repo.build_many.assert_not_called()
        category_repo.save_all.assert_not_awaited()

    async def test_duplicates_are_created_once(self, category_repo):
        result = await CategoryReconciler(category_repo).reconcile(
            ["Food", "Food", "Transport"]
        )

        category_repo.build_many.assert_called_once_with(["Food", "Transport"])
        category_repo.save_all.assert_awaited_once()
        saved = category_repo.save_all.await_args.args[0]
        assert [c.title for c in saved] == ["Food", "Transport"]
        assert set(result.categories) == {"Food", "Transport"}
        assert [c.title for c in result.created] == ["Food", "Transport"]

    async def test_single_batched_lookup_with_distinct_names(self, category_repo):
        await CategoryReconciler(category_repo).reconcile(["Food", "Job", "Food"])

        category_repo.find_by_titles.assert_awaited_once_with({"Food", "Job"})

    async def test_existing_categories_are_reused(self, category_repo):
        food = make_category("Food")
        category_repo.find_by_titles.return_value = [food]

        result = await CategoryReconciler(category_repo).reconcile(["Food", "Job", "Food"])

        category_repo.build_many.assert_called_once_with(["Job"])
        assert result.categories["Food"] is food
        assert [c.title for c in result.created] == ["Job"]

    async def test_all_existing_means_no_writes(self, category_repo):
        food = make_category("Food")
        job = make_category("Job")
        category_repo.find_by_titles.return_value = [job, food]

        result = await CategoryReconciler(category_repo).reconcile(["Food", "Job"])

        category_repo.build_many.assert_not_called()
        category_repo.save_all.assert_not_awaited()
        assert result.categories == {"Food": food, "Job": job}
        assert result.created == []

    async def test_first_seen_order_is_kept(self, category_repo):
        await CategoryReconciler(category_repo).reconcile(["C", "A", "B", "A", "C"])

        category_repo.build_many.assert_called_once_with(["C", "A", "B"])

    async def test_empty_name_is_a_creatable_title(self, category_repo):
        result = await CategoryReconciler(category_repo).reconcile(["", "Food", ""])

        category_repo.build_many.assert_called_once_with(["", "Food"])
        assert result.categories[""].title == ""

    async def test_every_name_maps_to_one_entity(self, category_repo):
        names = ["Food", "Transport", "Food", "Food"]

        result = await CategoryReconciler(category_repo).reconcile(names)

        assert len({id(result.categories[name]) for name in names}) == 2

    async def test_store_failure_propagates(self, category_repo):
        category_repo.save_all.side_effect = RuntimeError("db down")

        with pytest.raises(RuntimeError, match="db down"):
            await CategoryReconciler(category_repo).reconcile(["Food"])
