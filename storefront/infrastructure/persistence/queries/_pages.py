"""Serialization of repository pages into cacheable JSON dicts."""

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel

from storefront.schemas.common import page_count


def to_json[S: BaseModel](schema: type[S], row: Any) -> dict[str, Any]:
    return schema.model_validate(row).model_dump(mode="json")


def to_page[S: BaseModel](
    schema: type[S], rows: Sequence[Any], total: int, per_page: int
) -> dict[str, Any]:
    """Return {data, page_count, total} with every row dumped through schema."""
    return {
        "data": [to_json(schema, row) for row in rows],
        "page_count": page_count(total, per_page),
        "total": total,
    }
