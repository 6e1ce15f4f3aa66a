"""Error codes and user-friendly messages.

Each catalog entry has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

ERROR_CATALOG: dict[str, dict] = {
    "IMPORT_001": {
        "code": "IMPORT_001",
        "message": "CSV row has an invalid transaction type or value",
        "user_message": "A row in this file has an unsupported type or value.",
        "suggestion": "Use 'income' or 'outcome' for the type and a plain number for the value.",
        "retry_allowed": False,
    },
    "DB_001": {
        "code": "DB_001",
        "message": "Database operation failed",
        "user_message": "A database error occurred",
        "suggestion": "Please try again later",
        "retry_allowed": True,
    },
    "DB_002": {
        "code": "DB_002",
        "message": "Resource already exists",
        "user_message": "This record already exists",
        "suggestion": "Another import may have created it at the same time; please retry",
        "retry_allowed": True,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request failed validation",
        "user_message": "Invalid input data",
        "suggestion": "Please check your input and try again",
        "retry_allowed": True,
    },
    "SYS_001": {
        "code": "SYS_001",
        "message": "Internal server error",
        "user_message": "An unexpected error occurred",
        "suggestion": "Please try again later or contact support",
        "retry_allowed": True,
    },
    # API-specific errors
    "API_001": {
        "code": "API_001",
        "message": "Invalid content type uploaded",
        "user_message": "Only CSV files are supported.",
        "suggestion": "Send the file with Content-Type: text/csv.",
        "retry_allowed": False,
    },
    "API_002": {
        "code": "API_002",
        "message": "File size exceeds maximum limit",
        "user_message": "The file is too large.",
        "suggestion": "Split the file into smaller batches and import them one by one.",
        "retry_allowed": False,
    },
    "API_003": {
        "code": "API_003",
        "message": "Empty upload body",
        "user_message": "The uploaded file is empty.",
        "suggestion": "Please upload a CSV with a header row and at least one transaction.",
        "retry_allowed": False,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Unknown codes fall back to a generic definition instead of raising.
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def is_retryable(error_code: str) -> bool:
    """Check if an error is retryable."""
    return get_error(error_code)["retry_allowed"]
