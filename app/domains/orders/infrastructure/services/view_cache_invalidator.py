"""
View Cache Invalidator

Drops a tenant's cached read views from Redis after order writes. Cache
trouble is logged and never fails the request that triggered it.
"""

import logging
from typing import Iterable
from uuid import UUID

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from app.domains.orders.application.ports import IViewCacheInvalidator

logger = logging.getLogger(__name__)

DEFAULT_SCOPES: tuple[str, ...] = ("orders", "inventory", "dashboard")


class RedisViewCacheInvalidator(IViewCacheInvalidator):
    """
    Deletes keys matching ``{prefix}:{tenant_id}:{scope}:*``.

    Uses SCAN rather than KEYS so large keyspaces do not block Redis.
    """

    def __init__(self, redis_client: aioredis.Redis, prefix: str = "views", scan_count: int = 500):
        self.redis = redis_client
        self.prefix = prefix
        self.scan_count = scan_count

    def pattern_for(self, tenant_id: UUID, scope: str) -> str:
        return f"{self.prefix}:{tenant_id}:{scope}:*"

    async def invalidate(self, tenant_id: UUID, scopes: Iterable[str] | None = None) -> int:
        deleted = 0
        for scope in scopes or DEFAULT_SCOPES:
            pattern = self.pattern_for(tenant_id, scope)
            try:
                keys = [key async for key in self.redis.scan_iter(match=pattern, count=self.scan_count)]
                if keys:
                    deleted += await self.redis.delete(*keys)
            except (RedisError, OSError) as e:
                logger.warning(f"Could not invalidate cached views '{pattern}': {e}")
        if deleted:
            logger.debug(f"Invalidated {deleted} cached views for tenant {tenant_id}")
        return deleted


class NullViewCacheInvalidator(IViewCacheInvalidator):
    """Used when no Redis is configured."""

    async def invalidate(self, tenant_id: UUID, scopes: Iterable[str] | None = None) -> int:
        return 0
