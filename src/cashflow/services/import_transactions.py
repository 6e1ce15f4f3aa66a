"""Transaction import service.

This module orchestrates the CSV import workflow:
1. Parse the file into records (fully drained before anything else runs)
2. Reconcile category names, creating missing categories
3. Materialize transactions bound to their categories
4. Persist the transactions in one batch
5. Delete the source file
"""

import logging
from dataclasses import dataclass, field
from os import PathLike

import anyio
from sqlalchemy.ext.asyncio import AsyncSession

from cashflow.config import settings
from cashflow.models.category import Category
from cashflow.models.transaction import Transaction
from cashflow.parsers.csv_records import collect_records, parse_csv_file
from cashflow.repositories.category import CategoryRepository
from cashflow.repositories.transaction import TransactionRepository
from cashflow.services.categories import CategoryReconciler
from cashflow.services.materializer import TransactionMaterializer

logger = logging.getLogger(__name__)


@dataclass
class ImportOutcome:
    """Entities produced by one import batch."""

    transactions: list[Transaction] = field(default_factory=list)
    created_categories: list[Category] = field(default_factory=list)


class ImportTransactionsService:
    """Service for importing a CSV file of transactions.

    Category creation and transaction persistence are two separate commits.
    A failure after the category commit leaves those categories stored, and
    any failure leaves the source file in place.
    """

    def __init__(self, db: AsyncSession):
        """Initialize the service.

        Args:
            db: Database session for persistence
        """
        self.db = db
        self.category_repo = CategoryRepository(db)
        self.transaction_repo = TransactionRepository(db)
        self.reconciler = CategoryReconciler(self.category_repo)
        self.materializer = TransactionMaterializer(self.transaction_repo)

    async def execute(self, file_path: str | PathLike[str]) -> list[Transaction]:
        """Import ``file_path`` and return the persisted transactions in row order."""
        outcome = await self.import_file(file_path)
        return outcome.transactions

    async def import_file(self, file_path: str | PathLike[str]) -> ImportOutcome:
        """Run the full import and report what was created.

        Args:
            file_path: Path to a CSV file with a header row

        Returns:
            ImportOutcome with the persisted transactions and new categories

        Raises:
            RecordFormatError: If a row has an invalid type or value
            SQLAlchemyError: If a lookup or save fails
            OSError: If the file cannot be read or deleted
        """
        logger.info("Starting CSV import", extra={"file_path": str(file_path)})

        try:
            records = await collect_records(parse_csv_file(file_path))
            logger.info("Parse complete", extra={"records_count": len(records)})

            reconciliation = await self.reconciler.reconcile(
                [record.category for record in records]
            )

            transactions = self.materializer.materialize(records, reconciliation.categories)
            await self.transaction_repo.save_all(transactions)
            logger.info(
                "Persisted transactions",
                extra={"transactions_count": len(transactions)},
            )

            await anyio.Path(file_path).unlink()

        except Exception as e:
            if settings.debug:
                logger.exception(
                    "CSV import failed",
                    extra={"error_type": type(e).__name__, "file_path": str(file_path)},
                )
            else:
                logger.error(
                    "CSV import failed",
                    extra={"error_type": type(e).__name__, "file_path": str(file_path)},
                )
            # Discard the failed unit of work; earlier commits stay.
            await self.db.rollback()
            raise

        return ImportOutcome(
            transactions=transactions,
            created_categories=reconciliation.created,
        )
