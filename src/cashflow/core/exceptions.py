"""Custom exception classes for transaction imports.

Each exception carries an error_code that maps to the catalog in errors.py.
Storage and filesystem failures are not wrapped: they reach the caller as
raised by SQLAlchemy or the OS.
"""

from typing import Any


class ImportProcessingError(Exception):
    """Base exception for all import processing errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "IMPORT_001")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return (default: 500)
    """

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        http_status: int = 500,
    ):
        """Initialize the exception.

        Args:
            error_code: Error code from errors.py
            details: Additional error context (not shown to users)
            http_status: HTTP status code (default: 500)
        """
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status
        super().__init__(error_code)


class RecordFormatError(ImportProcessingError):
    """Raised when a CSV row cannot be decoded or does not fit the columns.

    Rows with an empty title, type or value are skipped instead; this error
    covers non-empty fields with the wrong shape or size, and rows the CSV
    reader rejects (field ``"row"``) (IMPORT_001).
    """

    def __init__(self, row_number: int, field: str, value: str):
        super().__init__(
            "IMPORT_001",
            {"row": row_number, "field": field, "value": value},
            http_status=400,
        )
        self.row_number = row_number
        self.field = field


class UploadError(ImportProcessingError):
    """Raised when an uploaded CSV body is rejected before import.

    Covers wrong content type (API_001), oversized body (API_002) and
    empty body (API_003).
    """

    def __init__(self, error_code: str, details: dict[str, Any] | None = None):
        super().__init__(error_code, details, http_status=400)
