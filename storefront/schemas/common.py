"""Shared field validators, list parameters and response envelopes."""

import re
from typing import Annotated, Any, Generic, TypeVar

from pydantic import AfterValidator, BaseModel, Field

from storefront.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

T = TypeVar("T")

MONEY_PATTERN = re.compile(r"^\d+(\.\d{1,2})?$")
SORT_PATTERN = r"^[a-z_]+\.(asc|desc)$"


def money(message: str) -> AfterValidator:
    """Validator for decimal strings with at most two fraction digits ("12.50")."""

    def check(value: str) -> str:
        if not MONEY_PATTERN.match(value):
            raise ValueError(message)
        return value

    return AfterValidator(check)


def required(message: str) -> AfterValidator:
    """Validator rejecting empty or whitespace-only strings with message."""

    def check(value: str) -> str:
        if not value.strip():
            raise ValueError(message)
        return value

    return AfterValidator(check)


def non_empty(message: str) -> AfterValidator:
    def check(value: list[Any]) -> list[Any]:
        if not value:
            raise ValueError(message)
        return value

    return AfterValidator(check)


def id_list(resource: str) -> Any:
    """list[str] type that must hold at least one id for resource."""
    return Annotated[list[str], non_empty(f"At least one {resource} must be selected")]


class ListParams(BaseModel):
    """Common paging/sorting parameters for list queries."""

    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    sort: str = Field(default="created_at.desc", pattern=SORT_PATTERN)

    def sort_field(self) -> tuple[str, bool]:
        """Return (column name, descending)."""
        field, _, direction = self.sort.partition(".")
        return field, direction == "desc"


class Page(BaseModel, Generic[T]):
    """One page of a list query."""

    data: list[T]
    page_count: int
    total: int


class ActionResponse(BaseModel, Generic[T]):
    """JSON shape of every mutation result: exactly one of data or error is set."""

    data: T | None = None
    error: str | None = None


def page_count(total: int, per_page: int) -> int:
    return (total + per_page - 1) // per_page if total else 0
