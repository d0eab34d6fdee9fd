"""
Application lifecycle management using the FastAPI lifespan pattern.

Handles startup checks and graceful release of pooled connections.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.config.settings import get_settings
from app.core.container import get_container
from app.database.async_db import dispose_engine, get_async_engine

logger = logging.getLogger(__name__)


class LifecycleManager:
    """
    Manages application lifecycle events.

    Startup verifies connectivity without failing the boot; shutdown
    disposes the database engine and closes the Redis client.
    """

    def __init__(self) -> None:
        self._initialized = False

    async def startup(self) -> None:
        if self._initialized:
            logger.warning("Lifecycle already initialized, skipping startup")
            return

        logger.info("Starting application lifecycle...")
        self._verify_configurations()
        await self._verify_database()
        await self._verify_cache()

        self._initialized = True
        logger.info("Application lifecycle startup completed")

    async def shutdown(self) -> None:
        if not self._initialized:
            logger.warning("Lifecycle not initialized, skipping shutdown")
            return

        logger.info("Stopping application lifecycle...")
        await get_container().close()
        await dispose_engine()

        self._initialized = False
        logger.info("Application lifecycle shutdown completed")

    def _verify_configurations(self) -> None:
        settings = get_settings()
        if not settings.SENTRY_DSN:
            logger.info("SENTRY_DSN not configured - error tracking disabled")
        logger.info(
            f"Order transitions: {settings.ORDER_TRANSITION_MAX_ATTEMPTS} attempts, "
            f"{settings.ORDER_TRANSITION_RETRY_DELAY}s delay"
        )

    async def check_readiness(self) -> dict[str, bool]:
        """Reachability of the database and of Redis."""
        return {"database": await self._verify_database(), "cache": await self._verify_cache()}

    async def _verify_database(self) -> bool:
        try:
            async with get_async_engine().connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Database connectivity check failed: {e}")
            return False
        logger.debug("Database connectivity verified")
        return True

    async def _verify_cache(self) -> bool:
        try:
            await get_container().orders.create_view_cache_invalidator().redis.ping()
        except (RedisError, OSError) as e:
            logger.warning(f"Redis connectivity check failed, cached views will not be invalidated: {e}")
            return False
        logger.debug("Redis connectivity verified")
        return True


_lifecycle_manager: LifecycleManager | None = None


def get_lifecycle_manager() -> LifecycleManager:
    """Get or create the global lifecycle manager instance."""
    global _lifecycle_manager
    if _lifecycle_manager is None:
        _lifecycle_manager = LifecycleManager()
    return _lifecycle_manager


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Usage:
        app = FastAPI(lifespan=lifespan)
    """
    lifecycle = get_lifecycle_manager()

    await lifecycle.startup()

    yield

    await lifecycle.shutdown()
