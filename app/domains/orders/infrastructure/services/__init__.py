"""
Orders Infrastructure Services
"""

from .view_cache_invalidator import DEFAULT_SCOPES, NullViewCacheInvalidator, RedisViewCacheInvalidator

__all__ = [
    "DEFAULT_SCOPES",
    "NullViewCacheInvalidator",
    "RedisViewCacheInvalidator",
]
