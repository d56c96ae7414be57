"""cached() decorator for async query functions."""

from collections.abc import Callable, Sequence
from functools import wraps
from typing import Any

from storefront.core.config import get_settings
from storefront.infrastructure.cache.cache_protocol import CacheProtocol
from storefront.infrastructure.cache.keys import query_key
from storefront.shared.context import is_cache_bypassed

TagSpec = Sequence[str] | Callable[..., Sequence[str]]


def _resolve_cache(
    args: tuple[Any, ...], kwargs: dict[str, Any]
) -> tuple[CacheProtocol | None, tuple[Any, ...], dict[str, Any]]:
    """Resolve the cache backend and the arguments that identify the query.

    Resolution order: keyword "cache", then args[0].cache (methods on a
    query object). The resolved holder is dropped from the key arguments.
    """
    if isinstance(kwargs.get("cache"), CacheProtocol):
        call_kwargs = {k: v for k, v in kwargs.items() if k != "cache"}
        return kwargs["cache"], args, call_kwargs
    if args:
        cache_attr = getattr(args[0], "cache", None)
        if isinstance(cache_attr, CacheProtocol):
            return cache_attr, args[1:], kwargs
    return None, args, kwargs


def cached(
    key_prefix: str,
    ttl: int | None = None,
    tags: TagSpec = (),
    key_builder: Callable[..., str] | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator to cache async function results under tags.

    Skips the cache entirely (no read, no write) while no_store() is
    active, so reads made during a mutation always hit the database.
    None results are not cached.

    Args:
        key_prefix: Query name used in the key (e.g. 'products').
        ttl: Time-to-live in seconds; defaults to settings.cache_ttl_queries.
        tags: Tags to register the entry under, or a callable receiving the
            query arguments and returning them (for per-record tags).
        key_builder: Optional callable(*args, **kwargs) -> key.

    Returns:
        Decorator that caches JSON-serializable return values.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            cache, func_args, call_kwargs = _resolve_cache(args, kwargs)
            if cache is None or is_cache_bypassed():
                return await func(*args, **kwargs)
            if key_builder:
                cache_key = key_builder(*func_args, **call_kwargs)
            else:
                cache_key = query_key(key_prefix, *func_args, **call_kwargs)
            cached_value = await cache.get(cache_key)
            if cached_value is not None:
                return cached_value
            result = await func(*args, **kwargs)
            if result is not None:
                entry_tags = tags(*func_args, **call_kwargs) if callable(tags) else tags
                await cache.set(
                    cache_key,
                    result,
                    ttl=ttl if ttl is not None else get_settings().cache_ttl_queries,
                    tags=list(entry_tags),
                )
            return result

        return wrapper

    return decorator
