"""Helpers shared by the e621 listing endpoints."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter

from py621.core import SerializationError
from py621.models import Record
from py621.runtime.rest import ResponseAdapter

R = TypeVar("R", bound=Record)


def build_listing_query(params: dict[str, Any]) -> dict[str, Any]:
    """Build ``limit``, ``page`` and filter parameters for a listing request.

    ``page`` is omitted when no cursor is set (the first page of an
    unordered listing).
    """
    query: dict[str, Any] = {"limit": int(params["limit"])}
    cursor = params.get("cursor")
    if cursor is not None:
        query["page"] = str(cursor)
    query.update(params["filter"].to_params())
    return query


class RecordListAdapter(ResponseAdapter, Generic[R]):
    """Decode a listing body into records.

    Accepts a bare JSON array or an object wrapping the array under
    ``key`` (``{"posts": [...]}``).
    """

    def __init__(self, model: type[R], key: str) -> None:
        self._model = model
        self._key = key
        self._list = TypeAdapter(list[model])  # type: ignore[valid-type]

    def parse(self, response: Any, params: dict[str, Any]) -> list[R]:
        items = response
        if isinstance(response, dict):
            if self._key not in response:
                raise SerializationError(
                    f"Serialization error: expected a {self._key!r} field in the response"
                )
            items = response[self._key]
        if not isinstance(items, list):
            raise SerializationError(
                f"Serialization error: expected a list of {self._key}, got {type(items).__name__}"
            )
        return self._list.validate_python(items)


class RecordAdapter(ResponseAdapter, Generic[R]):
    """Decode a single-record body, optionally wrapped under ``key``."""

    def __init__(self, model: type[R], key: str | None = None) -> None:
        self._model = model
        self._key = key

    def parse(self, response: Any, params: dict[str, Any]) -> R:
        if self._key is not None and isinstance(response, dict) and self._key in response:
            response = response[self._key]
        return self._model.model_validate(response)
