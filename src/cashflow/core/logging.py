"""Logging configuration.

Library modules only call ``logging.getLogger(__name__)``; handlers are
attached once by the application entrypoints through ``configure_logging``.
"""

import json
import logging
import sys

_ROOT_LOGGER_NAME = "cashflow"

# Extra fields copied from ``logger.x(..., extra={...})`` into the JSON payload.
_EXTRA_FIELDS = (
    "request_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "error_code",
    "error_type",
    "client_ip",
    "row_number",
    "category_title",
    "file_path",
    "records_count",
    "categories_count",
    "created_count",
    "transactions_count",
)


class JSONLogFormatter(logging.Formatter):
    """Format log records as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in _EXTRA_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def configure_logging(level: str = "INFO") -> None:
    """Attach a single JSON stream handler to the package logger.

    Calling it again only updates the level.
    """
    logger = logging.getLogger(_ROOT_LOGGER_NAME)
    logger.setLevel(level.upper())
    if any(getattr(h, "_cashflow_handler", False) for h in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONLogFormatter())
    handler._cashflow_handler = True
    logger.addHandler(handler)
