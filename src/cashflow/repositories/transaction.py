"""Transaction repository with batch creation and balance queries."""
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cashflow.models.transaction import Transaction, TransactionType
from cashflow.repositories.base import BaseRepository
from cashflow.schemas.transaction import Balance


class TransactionRepository(BaseRepository[Transaction]):
    """Repository for Transaction model."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Transaction)

    def build_many(self, rows: Iterable[Mapping[str, Any]]) -> list[Transaction]:
        """Build unsaved transactions from attribute mappings, keeping their order."""
        return [Transaction(**row) for row in rows]

    async def get_all_with_categories(self, skip: int = 0, limit: int = 1000) -> list[Transaction]:
        """Get transactions (category eagerly joined), oldest first."""
        result = await self.db.execute(
            select(Transaction)
            .order_by(Transaction.created_at)
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().unique().all())

    async def get_balance(self) -> Balance:
        """
        Sum values per transaction type.
        Returns Balance with total = income - outcome.
        """
        result = await self.db.execute(
            select(Transaction.type, func.sum(Transaction.value).label("total")).group_by(
                Transaction.type
            )
        )
        totals = {row.type: Decimal(str(row.total or 0)) for row in result}
        income = totals.get(TransactionType.INCOME, Decimal("0"))
        outcome = totals.get(TransactionType.OUTCOME, Decimal("0"))
        return Balance(income=income, outcome=outcome, total=income - outcome)
