import os
import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.append(str(Path(__file__).parents[1] / "src"))

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)

from cashflow.db.session import get_db  # noqa: E402
from cashflow.main import app  # noqa: E402

# One shared in-memory connection so every session sees the same tables.
test_engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    poolclass=StaticPool,
    connect_args={"check_same_thread": False} if TEST_DATABASE_URL.startswith("sqlite") else {},
)
TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(scope="function")
async def setup_database():
    """Create tables for tests that need the database, and drop them after.

    Not autouse so pure unit tests (parsers, services with mocks) run without
    touching a database.
    """
    from cashflow.models.base import BaseModel

    async with test_engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.drop_all)

    # Fresh connection per test; the in-memory database goes with it.
    await test_engine.dispose()


@pytest.fixture
async def db_session(setup_database):
    """Provide test database session."""
    async with TestSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client(db_session: AsyncSession, tmp_path, monkeypatch):
    """Provide test client with database override and a private upload dir."""
    from cashflow.config import settings

    async def override_get_db():
        yield db_session

    monkeypatch.setattr(settings, "upload_dir", str(tmp_path))
    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV text to a file under tmp_path and return its path."""

    def _write(content: str, name: str = "import.csv") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8", newline="")
        return path

    return _write
