"""Resource action layer: uniform mutation results and generic deletes.

Every mutation returns an ActionResult and never raises. Failures become
an error string via get_error_message(); successes invalidate the cache
tag of the resource type so subsequent cached reads are fresh. Read
caching is bypassed for the whole duration of an action (no_store()).
"""

import functools
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from storefront.application.actions.errors import get_error_message
from storefront.application.interfaces.repositories import IKeyedResourceStore
from storefront.application.interfaces.services import ICacheInvalidator
from storefront.domain.exceptions import StorefrontException, ValidationException
from storefront.shared.context import no_store

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ActionResult[T]:
    """Outcome of a mutation: exactly one of data or error is meaningful.

    A success may carry data=None (e.g. deleting an id that matched nothing).
    """

    data: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: T | None = None) -> "ActionResult[T]":
        return cls(data=data, error=None)

    @classmethod
    def failure(cls, error: str) -> "ActionResult[T]":
        return cls(data=None, error=error)


def take_first[T](rows: Sequence[T]) -> T | None:
    """Return the first row of a RETURNING result, or None when empty."""
    return rows[0] if rows else None


def parse_input[M: BaseModel](model: type[M], payload: M | dict[str, Any]) -> M:
    """Validate a raw payload (dict) into model; pass model instances through."""
    if isinstance(payload, model):
        return payload
    return model.model_validate(payload)


def _log_failure(name: str, exc: Exception) -> None:
    if isinstance(exc, (StorefrontException, ValidationError)):
        logger.warning("Action %s failed: %s", name, exc)
    else:
        logger.exception("Action %s failed with unexpected error", name)


def action[**P, T](
    func: Callable[P, Awaitable[Any]],
) -> Callable[P, Awaitable[ActionResult[Any]]]:
    """Wrap an async mutation so it runs under no_store() and never raises.

    The wrapped coroutine may return an ActionResult (passed through) or a
    plain value (wrapped as a success). Any exception becomes a failure.
    """

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> ActionResult[Any]:
        with no_store():
            try:
                result = await func(*args, **kwargs)
            except Exception as exc:
                _log_failure(func.__qualname__, exc)
                return ActionResult.failure(get_error_message(exc))
        if isinstance(result, ActionResult):
            return result
        return ActionResult.success(result)

    return wrapper


async def delete_single[RecordT](
    store: IKeyedResourceStore[RecordT],
    resource_id: str,
    *,
    revalidate_tag: str,
    cache: ICacheInvalidator,
    pre_delete: Callable[[str], Awaitable[None]] | None = None,
) -> ActionResult[RecordT]:
    """Delete one record by id and invalidate the resource's cache tag.

    pre_delete(resource_id) runs first, inside the same transaction as the
    delete; if it raises, nothing is deleted and the tag is not touched.
    An id that matches no row is a success with data=None, and the tag is
    still invalidated.

    Args:
        store: Keyed store for the resource type.
        resource_id: Id of the row to delete.
        revalidate_tag: Cache tag owned by the resource type.
        cache: Invalidation port.
        pre_delete: Optional hook for dependent rows (or guards).

    Returns:
        ActionResult with the deleted record (or None), or an error message.
    """
    with no_store():
        try:
            if not resource_id:
                raise ValidationException("An id is required", field="id")
            async with store.transaction():
                if pre_delete is not None:
                    await pre_delete(resource_id)
                deleted = take_first(await store.delete_by_key(resource_id))
            await cache.invalidate(revalidate_tag)
        except Exception as exc:
            _log_failure(f"delete_single[{revalidate_tag}]", exc)
            return ActionResult.failure(get_error_message(exc))
    logger.info(
        "Deleted %s from %s (matched=%s)", resource_id, revalidate_tag, deleted is not None
    )
    return ActionResult.success(deleted)


async def delete_multiple[RecordT](
    store: IKeyedResourceStore[RecordT],
    resource_ids: Sequence[str],
    *,
    revalidate_tag: str,
    cache: ICacheInvalidator,
    pre_delete: Callable[[Sequence[str]], Awaitable[None]] | None = None,
) -> ActionResult[list[RecordT]]:
    """Delete every record whose id is in resource_ids and invalidate the tag.

    Same contract as delete_single; pre_delete receives the full id list and
    the data is the list of deleted records (possibly empty). Duplicate ids
    are tolerated.
    """
    ids = list(resource_ids)
    with no_store():
        try:
            if not ids:
                raise ValidationException("At least one id is required", field="ids")
            async with store.transaction():
                if pre_delete is not None:
                    await pre_delete(ids)
                deleted = await store.delete_by_key_set(ids)
            await cache.invalidate(revalidate_tag)
        except Exception as exc:
            _log_failure(f"delete_multiple[{revalidate_tag}]", exc)
            return ActionResult.failure(get_error_message(exc))
    logger.info("Deleted %d of %d from %s", len(deleted), len(ids), revalidate_tag)
    return ActionResult.success(list(deleted))
