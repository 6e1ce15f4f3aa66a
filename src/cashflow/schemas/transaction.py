"""Transaction-specific request/response schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from cashflow.models.transaction import TransactionType
from cashflow.schemas.category import CategoryResponse


class TransactionResponse(BaseModel):
    """Transaction data for API responses."""

    id: UUID
    title: str
    type: TransactionType
    value: Decimal
    category: CategoryResponse | None = Field(
        None, description="Resolved category (None only for unresolved references)"
    )
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class Balance(BaseModel):
    """Running totals across all persisted transactions."""

    income: Decimal = Field(default=Decimal("0"), description="Sum of income values")
    outcome: Decimal = Field(default=Decimal("0"), description="Sum of outcome values")
    total: Decimal = Field(default=Decimal("0"), description="income - outcome")


class TransactionListResult(BaseModel):
    """Transactions together with the current balance."""

    transactions: list[TransactionResponse]
    balance: Balance


class ImportResult(BaseModel):
    """Result of importing one CSV batch."""

    transactions: list[TransactionResponse]
    imported_count: int = Field(description="Number of transactions persisted")
    categories_created: int = Field(description="Number of categories created by this batch")
