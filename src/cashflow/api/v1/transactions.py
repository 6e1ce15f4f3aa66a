"""Transaction endpoints for CSV import and listing."""

import logging
from pathlib import Path
from uuid import uuid4

import anyio
from fastapi import APIRouter, Depends, Request, status

from cashflow.api.deps import get_import_service, get_transaction_repository
from cashflow.config import settings
from cashflow.core.exceptions import UploadError
from cashflow.repositories.transaction import TransactionRepository
from cashflow.schemas.transaction import (
    ImportResult,
    TransactionListResult,
    TransactionResponse,
)
from cashflow.services.import_transactions import ImportTransactionsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["transactions"])

CSV_CONTENT_TYPES = {"text/csv", "application/csv"}


async def _store_upload(request: Request) -> Path:
    """Stream the request body into a new file under ``settings.upload_dir``.

    Raises:
        UploadError: API_002 when the body exceeds the size cap,
            API_003 when it is empty
    """
    max_bytes = settings.csv_max_size_mb * 1024 * 1024
    path = Path(settings.upload_dir) / f"import-{uuid4().hex}.csv"

    total = 0
    async with await anyio.open_file(path, "wb") as f:
        async for chunk in request.stream():
            if not chunk:
                continue
            total += len(chunk)
            if total > max_bytes:
                break
            await f.write(chunk)

    if total > max_bytes:
        await anyio.Path(path).unlink()
        raise UploadError("API_002", {"max_bytes": max_bytes})
    if total == 0:
        await anyio.Path(path).unlink()
        raise UploadError("API_003")

    return path


@router.post(
    "/import",
    response_model=ImportResult,
    status_code=status.HTTP_201_CREATED,
    summary="Import transactions from CSV",
    description="""
    Import a CSV file of transactions.

    ## File Requirements
    - Request body must be the raw CSV (`Content-Type: text/csv`)
    - First row is a header and is ignored
    - Columns: `title,type,value,category`
    - `type` is `income` or `outcome`
    - `value` has at most 2 decimal places and 10 integer digits
    - Maximum size: configurable via `CSV_MAX_SIZE_MB` (default: 10MB)

    Rows with an empty title, type or value are skipped. Categories that do
    not exist yet are created once per batch.

    ## Error Codes
    - API_001: Invalid content type
    - API_002: File too large
    - API_003: Empty file
    - IMPORT_001: Row that cannot be decoded or does not fit the stored columns
    """,
    responses={
        201: {"description": "Transactions imported"},
        400: {"description": "Bad request (invalid file, bad row, etc.)"},
        409: {"description": "Concurrent import created the same category"},
    },
)
async def import_transactions(
    request: Request,
    service: ImportTransactionsService = Depends(get_import_service),
) -> ImportResult:
    """
    Store the uploaded CSV and import it.

    The stored file is removed by the import on success and kept on failure.
    """
    content_type = (request.headers.get("content-type") or "").split(";")[0].strip()
    if content_type.lower() not in CSV_CONTENT_TYPES:
        raise UploadError("API_001", {"content_type": content_type})

    path = await _store_upload(request)
    logger.info("Stored CSV upload", extra={"file_path": str(path)})

    outcome = await service.import_file(path)

    return ImportResult(
        transactions=[TransactionResponse.model_validate(t) for t in outcome.transactions],
        imported_count=len(outcome.transactions),
        categories_created=len(outcome.created_categories),
    )


@router.get(
    "",
    response_model=TransactionListResult,
    summary="List transactions with balance",
)
async def list_transactions(
    transaction_repo: TransactionRepository = Depends(get_transaction_repository),
) -> TransactionListResult:
    """Get all transactions (oldest first) and the income/outcome balance."""
    transactions = await transaction_repo.get_all_with_categories()
    balance = await transaction_repo.get_balance()
    return TransactionListResult(
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
        balance=balance,
    )
