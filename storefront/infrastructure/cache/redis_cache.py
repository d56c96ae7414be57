"""Redis-based, tag-aware cache service.

Every cached key is added to one Redis set per tag (tag:<name>).
invalidate(tag) UNLINKs the members of that set and the set itself, so
invalidation never needs SCAN. Tag sets carry the TTL of their longest
lived member (EXPIRE NX/GT, Redis 7+).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

import redis.asyncio as redis

from storefront.core.config import get_settings
from storefront.infrastructure.cache.keys import tag_key

logger = logging.getLogger(__name__)


class CacheService:
    """Async Redis cache service with TTL and tag support.

    Call connect() at startup and disconnect() at shutdown. Every operation
    degrades to a miss / no-op when Redis is unreachable, after one
    reconnect attempt.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI.
        """
        self.redis = redis_client
        self.settings = get_settings()
        self._connected = False

    async def connect(self) -> None:
        """Establish (or verify) the Redis connection. Call on app startup."""
        try:
            if self.redis is None:
                self.redis = redis.Redis(
                    host=self.settings.redis_host,
                    port=self.settings.redis_port,
                    db=self.settings.redis_db,
                    password=(
                        self.settings.redis_password.get_secret_value()
                        if self.settings.redis_password
                        else None
                    ),
                    max_connections=self.settings.redis_max_connections,
                    decode_responses=True,
                    socket_connect_timeout=5,
                    socket_keepalive=True,
                )
            await self.redis.ping()
            self._connected = True
            logger.info(
                "Redis cache connected: %s:%s",
                self.settings.redis_host,
                self.settings.redis_port,
            )
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Cache disabled.", e)
            self._connected = False
            self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    async def _reconnect(self) -> bool:
        """Attempt to reconnect after a dropped connection. Returns True if reconnected."""
        if self.redis is None:
            return False
        try:
            await self.redis.aclose()
        except redis.RedisError:
            logger.debug("Ignoring error while closing dropped Redis connection")
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def _execute[R](
        self,
        op: str,
        target: str,
        call: Callable[[redis.Redis], Awaitable[R]],
        default: R,
    ) -> R:
        """Run call against Redis with one reconnect retry; return default on failure."""
        if not self.is_available() or self.redis is None:
            return default
        try:
            return await call(self.redis)
        except (redis.ConnectionError, redis.TimeoutError):
            if await self._reconnect() and self.redis is not None:
                try:
                    return await call(self.redis)
                except redis.RedisError:
                    logger.exception("Cache %s error for %s after reconnect", op, target)
                    return default
            logger.warning("Cache %s unavailable for %s (Redis disconnected)", op, target)
            return default
        except redis.RedisError:
            logger.exception("Cache %s error for %s", op, target)
            return default

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable."""

        async def call(client: redis.Redis) -> Any | None:
            value = await client.get(key)
            if value is None:
                logger.debug("Cache MISS: %s", key)
                return None
            logger.debug("Cache HIT: %s", key)
            return json.loads(value)

        return await self._execute("get", key, call, None)

    async def set(
        self, key: str, value: Any, ttl: int = 300, tags: Sequence[str] = ()
    ) -> bool:
        """Store value with TTL and register it under tags. Returns True on success.

        Args:
            key: Cache key (use storefront.infrastructure.cache.keys builders).
            value: Value to cache (JSON-serializable).
            ttl: Time-to-live in seconds.
            tags: Tags the key is invalidated by.
        """
        serialized = json.dumps(value, default=str)
        tag_keys = [tag_key(t) for t in tags]

        async def call(client: redis.Redis) -> bool:
            async with client.pipeline(transaction=True) as pipe:
                pipe.setex(key, ttl, serialized)
                for tk in tag_keys:
                    pipe.sadd(tk, key)
                    pipe.expire(tk, ttl, nx=True)
                    pipe.expire(tk, ttl, gt=True)
                await pipe.execute()
            logger.debug("Cache SET: %s (TTL: %ss, tags: %s)", key, ttl, list(tags))
            return True

        return await self._execute("set", key, call, False)

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True if the call reached Redis."""

        async def call(client: redis.Redis) -> bool:
            await client.unlink(key)
            logger.debug("Cache DELETE: %s", key)
            return True

        return await self._execute("delete", key, call, False)

    async def invalidate(self, tag: str) -> int:
        """Drop every key registered under tag and the tag set itself.

        Returns:
            Number of cached keys removed.
        """
        tk = tag_key(tag)

        async def call(client: redis.Redis) -> int:
            members = list(await client.smembers(tk))
            async with client.pipeline(transaction=False) as pipe:
                if members:
                    pipe.unlink(*members)
                pipe.unlink(tk)
                results = await pipe.execute()
            dropped = int(results[0] or 0) if members else 0
            logger.info("Cache INVALIDATE: %s (%s keys)", tag, dropped)
            return dropped

        return await self._execute("invalidate", tag, call, 0)
