"""Serve the API with uvicorn: ``python -m cashflow``."""

import uvicorn

from cashflow.config import settings


def main():
    uvicorn.run(
        "cashflow.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
