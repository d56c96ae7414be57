"""Cache key builders. Single place for key format.

Query keys hash their arguments so filter values (which may contain the
separator) never produce ambiguous keys. Tag names must not contain the
separator.
"""

import hashlib
from typing import Any

from pydantic import BaseModel

from storefront.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_QUERY, CACHE_PREFIX_TAG


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator."""
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def _canonical(value: Any) -> str:
    if isinstance(value, BaseModel):
        return value.model_dump_json()
    return repr(value)


def query_key(prefix: str, *args: Any, **kwargs: Any) -> str:
    """Cache key for a query result: prefix plus a digest of its arguments.

    Args:
        prefix: Query name (e.g. 'products').
        *args: Positional query arguments (pydantic models are dumped as JSON).
        **kwargs: Keyword query arguments.

    Returns:
        Key such as 'query:products:3f1c...'.
    """
    _validate_key_component(prefix, "prefix")
    parts = [_canonical(a) for a in args]
    parts.extend(f"{k}={_canonical(v)}" for k, v in sorted(kwargs.items()))
    digest = hashlib.sha256("|".join(parts).encode("utf-8")).hexdigest()[:32]
    return f"{CACHE_PREFIX_QUERY}{CACHE_KEY_SEP}{prefix}{CACHE_KEY_SEP}{digest}"


def tag_key(tag: str) -> str:
    """Key of the set holding every cache key registered under tag."""
    _validate_key_component(tag, "tag")
    return f"{CACHE_PREFIX_TAG}{CACHE_KEY_SEP}{tag}"
