"""Database models."""
from cashflow.models.category import Category
from cashflow.models.transaction import Transaction, TransactionType

__all__ = ["Category", "Transaction", "TransactionType"]
