from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cashflow.config import settings

# Statement parameters carry transaction titles and amounts; only echo them in
# development.
async_engine = create_async_engine(
    settings.database_url,
    echo=(settings.db_echo if settings.app_env.lower() == "development" else False),
    future=True,
)

AsyncSessionLocal = async_sessionmaker(
    async_engine, class_=AsyncSession, expire_on_commit=False
)


async def get_db() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session
