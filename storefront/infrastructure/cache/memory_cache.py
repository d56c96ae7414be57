"""In-process cache backends: InMemoryCache (single worker) and NullCache.

InMemoryCache is used when Redis is disabled; it keeps the same tag
semantics as CacheService so actions and queries behave identically.
"""

import copy
import logging
import time
from collections.abc import Sequence
from typing import Any

logger = logging.getLogger(__name__)


class InMemoryCache:
    """Dict-backed cache with per-key TTL and tag sets.

    Values are deep-copied on the way in and out so callers cannot mutate
    cached results. Only safe within one process.
    """

    def __init__(self, max_entries: int = 1024) -> None:
        self.max_entries = max_entries
        self._entries: dict[str, tuple[float, Any]] = {}
        self._tags: dict[str, set[str]] = {}

    def is_available(self) -> bool:
        return True

    def _evict_expired(self, now: float) -> None:
        expired = [k for k, (expires_at, _) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]

    async def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("Cache MISS: %s", key)
            return None
        expires_at, value = entry
        if expires_at <= time.monotonic():
            del self._entries[key]
            logger.debug("Cache MISS (expired): %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return copy.deepcopy(value)

    async def set(
        self, key: str, value: Any, ttl: int = 300, tags: Sequence[str] = ()
    ) -> bool:
        now = time.monotonic()
        if len(self._entries) >= self.max_entries:
            self._evict_expired(now)
            if len(self._entries) >= self.max_entries:
                # Drop the entry closest to expiry.
                oldest = min(self._entries, key=lambda k: self._entries[k][0])
                del self._entries[oldest]
        self._entries[key] = (now + ttl, copy.deepcopy(value))
        for tag in tags:
            self._tags.setdefault(tag, set()).add(key)
        return True

    async def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    async def invalidate(self, tag: str) -> int:
        keys = self._tags.pop(tag, set())
        dropped = sum(1 for key in keys if self._entries.pop(key, None) is not None)
        logger.info("Cache INVALIDATE: %s (%s keys)", tag, dropped)
        return dropped

    async def disconnect(self) -> None:
        self._entries.clear()
        self._tags.clear()


class NullCache:
    """Cache that stores nothing; invalidation is a no-op."""

    def is_available(self) -> bool:
        return False

    async def get(self, key: str) -> Any | None:
        return None

    async def set(
        self, key: str, value: Any, ttl: int = 300, tags: Sequence[str] = ()
    ) -> bool:
        return False

    async def delete(self, key: str) -> bool:
        return False

    async def invalidate(self, tag: str) -> int:
        return 0

    async def disconnect(self) -> None:
        return None
