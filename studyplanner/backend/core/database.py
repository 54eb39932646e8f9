"""
Database Engine and Sessions.

The async engine and its session factory are built on first use and
cached, so importing this module opens nothing. ``dispose_engine`` closes
the pool and drops both caches; the next call builds them again.

Transactions are per request: ``get_db_session`` commits when the
handler returns and rolls back when it raises. Repositories only flush.
"""

from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from studyplanner.backend.core.logging import get_logger

logger = get_logger(__name__)


@lru_cache
def get_engine() -> AsyncEngine:
    from studyplanner.backend.core.config import get_app_config, get_database_url

    db = get_app_config().database
    engine = create_async_engine(
        get_database_url(),
        pool_size=db.pool_size,
        max_overflow=db.max_overflow,
        pool_timeout=db.pool_timeout,
        pool_recycle=db.pool_recycle,
        echo=db.echo,
    )
    logger.debug("Database engine created", extra={"host": db.host, "database": db.name})
    return engine


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(get_engine(), class_=AsyncSession, expire_on_commit=False)


async def dispose_engine() -> None:
    if get_engine.cache_info().currsize:
        await get_engine().dispose()
        logger.debug("Database engine disposed")
    get_session_factory.cache_clear()
    get_engine.cache_clear()


async def create_tables() -> list[str]:
    """Create missing tables and return every table name the models define."""
    from studyplanner.backend.models import Base

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return sorted(Base.metadata.tables)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async with get_session_factory()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        else:
            await session.commit()


def describe_engine(engine: Any) -> str:
    """Engine URL with the password masked."""
    return engine.url.render_as_string(hide_password=True)
