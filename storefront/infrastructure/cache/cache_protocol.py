"""Cache protocol shared by the Redis, in-memory and null backends."""

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheProtocol(Protocol):
    """Tag-aware cache backend. Also satisfies the ICacheInvalidator port."""

    def is_available(self) -> bool:
        """Return True if cache is connected and usable."""
        ...

    async def get(self, key: str) -> Any:
        """Return cached value or None."""
        ...

    async def set(
        self, key: str, value: Any, ttl: int = 300, tags: Sequence[str] = ()
    ) -> bool:
        """Store value with TTL in seconds, registered under tags."""
        ...

    async def delete(self, key: str) -> bool:
        """Remove key from cache."""
        ...

    async def invalidate(self, tag: str) -> int:
        """Drop every key registered under tag; return how many were dropped."""
        ...
