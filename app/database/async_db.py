import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.config.settings import get_settings

logger = logging.getLogger(__name__)

_async_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def create_async_database_engine(database_url: str | None = None) -> AsyncEngine:
    """Create the async engine; pooling follows the environment."""
    settings = get_settings()
    url = database_url or settings.database_url

    try:
        base_config = {
            "echo": settings.DB_ECHO,
            "pool_pre_ping": True,
        }

        if settings.DEBUG or not url.startswith("postgresql"):
            # Development and non-Postgres URLs: no pooling
            logger.info("Creating async database engine for DEVELOPMENT (NullPool)")
            engine_config = {**base_config, "poolclass": NullPool}
        else:
            logger.info("Creating async database engine for PRODUCTION (pooled)")
            engine_config = {
                **base_config,
                "pool_size": settings.DB_POOL_SIZE,
                "max_overflow": settings.DB_MAX_OVERFLOW,
                "pool_recycle": settings.DB_POOL_RECYCLE,
                "pool_timeout": settings.DB_POOL_TIMEOUT,
            }

        return create_async_engine(url, **engine_config)

    except Exception as e:
        logger.error(f"Failed to create async database engine: {e}")
        raise


def get_async_engine() -> AsyncEngine:
    """Return the process-wide engine, creating it on first use."""
    global _async_engine
    if _async_engine is None:
        _async_engine = create_async_database_engine()
    return _async_engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the process-wide session factory."""
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_async_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _session_factory


async def dispose_engine() -> None:
    """Close pooled connections; called on application shutdown."""
    global _async_engine, _session_factory
    if _async_engine is not None:
        await _async_engine.dispose()
        logger.info("Async database engine disposed")
    _async_engine = None
    _session_factory = None


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding an async session.

    Repositories commit their own writes; this only rolls back on error.
    """
    async with get_session_factory()() as session:
        try:
            yield session
        except Exception as e:
            logger.error(f"Async database error: {e}")
            await session.rollback()
            raise


@asynccontextmanager
async def get_async_db_context():
    """
    Context manager for async database work outside request handling.
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            logger.error(f"Async database error: {e}")
            await session.rollback()
            raise
