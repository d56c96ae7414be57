"""Request-scoped context using contextvars.

Holds the cache-bypass flag that mutating actions raise for their whole
duration, so reads made during a mutation never serve or populate cached
results. The flag is scoped to the current async task, so concurrent
requests do not see each other's state.

Usage:
    with no_store():
        ...  # cached queries go straight to the database
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

_cache_bypass: ContextVar[bool] = ContextVar("cache_bypass", default=False)


@contextmanager
def no_store() -> Iterator[None]:
    """Disable read caching until the block exits (nesting is allowed)."""
    token = _cache_bypass.set(True)
    try:
        yield
    finally:
        _cache_bypass.reset(token)


def is_cache_bypassed() -> bool:
    """Return True while inside a no_store() block."""
    return _cache_bypass.get()
