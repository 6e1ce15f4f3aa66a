"""Build persistable transactions from parsed records."""

import logging
from collections.abc import Mapping, Sequence

from cashflow.models.category import Category
from cashflow.models.transaction import Transaction
from cashflow.repositories.transaction import TransactionRepository
from cashflow.schemas.internal import RawRecord

logger = logging.getLogger(__name__)


class TransactionMaterializer:
    """Bind records to their reconciled categories, preserving row order."""

    def __init__(self, transaction_repo: TransactionRepository):
        self.transaction_repo = transaction_repo

    def materialize(
        self, records: Sequence[RawRecord], categories: Mapping[str, Category]
    ) -> list[Transaction]:
        rows = []
        for record in records:
            category = categories.get(record.category)
            if category is None:
                # Left unresolved rather than rejected.
                logger.warning(
                    "No category resolved for record",
                    extra={"category_title": record.category},
                )
            rows.append(
                {
                    "title": record.title,
                    "type": record.type,
                    "value": record.value,
                    "category": category,
                }
            )
        return self.transaction_repo.build_many(rows)
