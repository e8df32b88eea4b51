"""REST request runner using endpoint specs and response adapters."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from ...core.exceptions import SerializationError
from .transport import RESTTransport


@dataclass(frozen=True)
class RestEndpointSpec:
    id: str
    method: str  # "GET" | "POST"
    build_path: Callable[[dict[str, Any]], str]
    build_query: Callable[[dict[str, Any]], dict[str, Any]] | None = None
    build_body: Callable[[dict[str, Any]], dict[str, Any]] | None = None
    # Largest page size the listing accepts (None for non-paginated endpoints)
    max_page_size: int | None = None


class ResponseAdapter:
    def parse(self, response: Any, params: dict[str, Any]) -> Any:
        return response

    def decode(self, response: Any, params: dict[str, Any]) -> Any:
        """Parse, turning any decoding failure into ``SerializationError``."""
        try:
            return self.parse(response, params)
        except SerializationError:
            raise
        except (ValidationError, TypeError, KeyError, ValueError) as e:
            raise SerializationError(f"Serialization error: {e}") from e


class RestRunner:
    def __init__(self, transport: RESTTransport) -> None:
        self._t = transport

    @property
    def transport(self) -> RESTTransport:
        return self._t

    async def run(
        self, *, spec: RestEndpointSpec, adapter: ResponseAdapter, params: dict[str, Any]
    ) -> Any:
        path = spec.build_path(params)
        query = spec.build_query(params) if spec.build_query else None
        body = spec.build_body(params) if spec.build_body else None

        if spec.method.upper() == "GET":
            data = await self._t.get(path, params=query)
        else:
            data = await self._t.post(path, form=body or {})

        return adapter.decode(data, params)
