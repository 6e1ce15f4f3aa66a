"""Import a local CSV file of transactions into the configured database.

Usage: python scripts/import_csv.py <path_to_csv>

The file is deleted after a successful import, exactly as for uploads.
"""

import asyncio
import json
import os
import sys

from cashflow.config import settings
from cashflow.core.logging import configure_logging
from cashflow.db.session import AsyncSessionLocal, async_engine
from cashflow.services.import_transactions import ImportTransactionsService


async def import_csv(csv_path: str) -> dict:
    try:
        async with AsyncSessionLocal() as session:
            outcome = await ImportTransactionsService(session).import_file(csv_path)
    finally:
        await async_engine.dispose()

    return {
        "imported_count": len(outcome.transactions),
        "categories_created": [c.title for c in outcome.created_categories],
        "transactions": [
            {
                "title": t.title,
                "type": t.type.value,
                "value": str(t.value),
                "category": t.category.title if t.category else None,
            }
            for t in outcome.transactions
        ],
    }


def main():
    if len(sys.argv) != 2:
        print("Usage: python scripts/import_csv.py <path_to_csv>", file=sys.stderr)
        sys.exit(1)

    csv_path = sys.argv[1]
    if not os.path.exists(csv_path):
        print(f"Error: File not found: {csv_path}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.log_level)
    result = asyncio.run(import_csv(csv_path))
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
