"""CSV transaction import with category reconciliation."""

__version__ = "0.1.0"
