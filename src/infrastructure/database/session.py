"""
Database connection management module.
Provides asynchronous database session management.
"""
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from src.config import settings
from src.infrastructure.database.models import Base


def _engine_options(url: str) -> dict:
    # SQLite（測試用）不共用連線，避免跨 event loop
    if url.startswith("sqlite"):
        return {"poolclass": NullPool}
    return {
        "pool_pre_ping": True,
        "pool_size": 10,
        "max_overflow": 20,
    }


# Create asynchronous engine
engine = create_async_engine(settings.database_url, **_engine_options(settings.database_url))

# Create asynchronous session factory
SessionLocal = async_sessionmaker(
    bind=engine,
    autoflush=False,
    expire_on_commit=False,
)


async def create_tables() -> None:
    """建立所有資料表（開發與測試用，正式環境使用 Alembic）。"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
