"""Cache: tag-aware Redis and in-process backends plus the cached() decorator.

Cached query results are registered under tags; actions invalidate a tag
after a successful mutation. Key format lives in keys.py.
"""

from storefront.infrastructure.cache.cache_protocol import CacheProtocol
from storefront.infrastructure.cache.decorators import cached
from storefront.infrastructure.cache.keys import query_key, tag_key
from storefront.infrastructure.cache.memory_cache import InMemoryCache, NullCache
from storefront.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheProtocol",
    "CacheService",
    "InMemoryCache",
    "NullCache",
    "cached",
    "query_key",
    "tag_key",
]
