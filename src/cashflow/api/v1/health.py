"""Liveness and readiness checks for the import service."""

import logging
import os

import anyio
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cashflow import __version__
from cashflow.config import settings
from cashflow.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


async def _check_database(db: AsyncSession) -> str:
    try:
        await db.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database check failed", extra={"error_type": type(e).__name__})
        return "unavailable"
    return "ok"


async def _check_upload_dir() -> str:
    # Uploads are streamed here before import, so it must accept new files.
    path = anyio.Path(settings.upload_dir)
    if not await path.is_dir():
        return "missing"
    if not os.access(settings.upload_dir, os.W_OK | os.X_OK):
        return "not writable"
    return "ok"


@router.get("/health")
async def health():
    """Liveness: the process is up and serving requests."""
    return {"status": "ok", "version": __version__}


@router.get("/health/ready")
async def health_ready(db: AsyncSession = Depends(get_db)):
    """Readiness: the database answers and uploads can be stored.

    Returns 503 with the failing check when the service cannot import.
    """
    checks = {
        "database": await _check_database(db),
        "upload_dir": await _check_upload_dir(),
    }
    if all(result == "ok" for result in checks.values()):
        return {"status": "ready", "checks": checks}

    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not ready", "checks": checks},
    )
