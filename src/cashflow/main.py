from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

from cashflow import __version__
from cashflow.api.middleware.error_handler import (
    handle_generic_error,
    handle_import_processing_error,
    handle_integrity_error,
    handle_validation_error,
)
from cashflow.api.middleware.logging import RequestLoggingMiddleware
from cashflow.api.v1 import router as v1_router
from cashflow.api.v1.health import router as health_router
from cashflow.config import settings
from cashflow.core.exceptions import ImportProcessingError
from cashflow.core.logging import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    configure_logging(settings.log_level)
    yield
    # Shutdown


def create_app() -> FastAPI:
    app = FastAPI(
        title="Cashflow API",
        description="CSV transaction import with category reconciliation",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(ImportProcessingError, handle_import_processing_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(Exception, handle_generic_error)

    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()
