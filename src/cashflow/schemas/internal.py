"""Internal data schemas for parsed CSV data.

These models represent the intermediate parsed rows before category
reconciliation and database persistence.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from cashflow.models.transaction import TransactionType


class RawRecord(BaseModel):
    """A single transaction row decoded from an import file.

    Fields are already trimmed. ``category`` may be an empty string, which is
    reconciled like any other title.
    """

    title: str = Field(..., min_length=1, description="Transaction title")
    type: TransactionType = Field(..., description="'income' or 'outcome'")
    value: Decimal = Field(..., description="Transaction amount")
    category: str = Field(default="", description="Category title as written in the file")
