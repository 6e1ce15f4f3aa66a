"""FastAPI dependency injection for database-backed services."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cashflow.db.session import get_db
from cashflow.repositories.category import CategoryRepository
from cashflow.repositories.transaction import TransactionRepository
from cashflow.services.import_transactions import ImportTransactionsService


async def get_category_repository(
    db: AsyncSession = Depends(get_db),
) -> CategoryRepository:
    return CategoryRepository(db)


async def get_transaction_repository(
    db: AsyncSession = Depends(get_db),
) -> TransactionRepository:
    return TransactionRepository(db)


async def get_import_service(
    db: AsyncSession = Depends(get_db),
) -> ImportTransactionsService:
    """
    Get import service instance bound to the request's session.

    Args:
        db: Database session

    Returns:
        ImportTransactionsService instance
    """
    return ImportTransactionsService(db)
