"""Transaction model for imported income and outcome entries."""
import enum
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import Enum, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cashflow.models.base import BaseModel

TITLE_MAX_LENGTH = 255
VALUE_PRECISION = 12
VALUE_SCALE = 2


class TransactionType(str, enum.Enum):
    INCOME = "income"
    OUTCOME = "outcome"


class Transaction(BaseModel):
    """A single income or outcome entry linked to one category."""

    __tablename__ = "transactions"

    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    type: Mapped[TransactionType] = mapped_column(
        Enum(
            TransactionType,
            name="transaction_type",
            native_enum=False,
            length=10,
            values_callable=lambda members: [m.value for m in members],
        ),
        nullable=False,
    )
    value: Mapped[Decimal] = mapped_column(Numeric(VALUE_PRECISION, VALUE_SCALE), nullable=False)
    category_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("categories.id"), nullable=True, index=True
    )

    # Relationships
    category: Mapped[Optional["Category"]] = relationship(
        "Category", lazy="joined"
    )

    def __repr__(self) -> str:
        return f"<Transaction(id={self.id}, title={self.title!r}, type={self.type.value}, value={self.value})>"
