# ============================================================================
# SCOPE: GLOBAL
# Description: Base container with shared singletons (settings, Redis client).
# Tenant-Aware: No - shared instances; tenant scoping happens per call.
# ============================================================================
"""
Base Container - Shared Singletons.

Single Responsibility: Manage shared connection-level resources.
"""

import logging

import redis.asyncio as aioredis

from app.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class BaseContainer:
    """
    Base container for shared singletons.

    Single Responsibility: Create and cache shared resources.
    """

    def __init__(self, settings: Settings | None = None):
        """
        Initialize base container.

        Args:
            settings: Optional settings instance (defaults to the cached one)
        """
        self.settings = settings or get_settings()
        self._redis_client: aioredis.Redis | None = None

        logger.info("BaseContainer initialized")

    def get_redis_client(self) -> aioredis.Redis:
        """
        Get the async Redis client (singleton).

        The connection is opened lazily on first command.
        """
        if self._redis_client is None:
            logger.info(f"Creating async Redis client: {self.settings.REDIS_HOST}:{self.settings.REDIS_PORT}")
            self._redis_client = aioredis.Redis.from_url(
                self.settings.redis_url,
                decode_responses=True,
                socket_timeout=5.0,
                socket_connect_timeout=5.0,
            )
        return self._redis_client

    async def close(self) -> None:
        """Release pooled connections."""
        if self._redis_client is not None:
            await self._redis_client.aclose()
            self._redis_client = None
            logger.info("Async Redis client closed")
