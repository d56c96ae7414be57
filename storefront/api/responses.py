"""Mapping of ActionResult to the {data, error} JSON envelope."""

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from storefront.application.actions import ActionResult


def _dump(value: Any, schema: type[BaseModel] | None) -> Any:
    if value is None or schema is None:
        return jsonable_encoder(value)
    if isinstance(value, list):
        return [schema.model_validate(v).model_dump(mode="json") for v in value]
    return schema.model_validate(value).model_dump(mode="json")


def action_response(
    result: ActionResult[Any], schema: type[BaseModel] | None = None
) -> JSONResponse:
    """Return 200 {data, error: null} on success, 400 {data: null, error} on failure.

    Args:
        result: Outcome of an action.
        schema: from_attributes response model used to serialize ORM rows
            (or lists of them); plain dicts pass through unchanged.
    """
    if not result.ok:
        return JSONResponse(status_code=400, content={"data": None, "error": result.error})
    return JSONResponse(
        status_code=200, content={"data": _dump(result.data, schema), "error": None}
    )
