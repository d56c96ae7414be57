"""Translate 'field.asc|desc' sort strings into ORDER BY clauses."""

from typing import Any

from sqlalchemy import Select


def apply_sort(
    stmt: Select[Any],
    model: Any,
    field: str,
    descending: bool,
    allowed: frozenset[str],
    fallback: str = "created_at",
) -> Select[Any]:
    """Order stmt by model.<field>; unknown fields fall back to fallback."""
    column = getattr(model, field if field in allowed else fallback)
    return stmt.order_by(column.desc() if descending else column.asc(), model.id)
