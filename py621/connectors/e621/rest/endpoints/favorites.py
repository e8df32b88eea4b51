"""e621 favorite endpoints (write operations, login required)."""

from __future__ import annotations

from typing import Any

from py621.connectors.e621.config import FAVORITES_PATH
from py621.models import Post
from py621.runtime.rest import RestEndpointSpec

from .common import RecordAdapter


def build_path(params: dict[str, Any]) -> str:
    return FAVORITES_PATH


def build_body(params: dict[str, Any]) -> dict[str, Any]:
    return {"post_id": int(params["post_id"])}


def build_delete_path(params: dict[str, Any]) -> str:
    return f"/favorites/{int(params['post_id'])}.json"


ADD_SPEC = RestEndpointSpec(
    id="favorite_add",
    method="POST",
    build_path=build_path,
    build_body=build_body,
)


class AddAdapter(RecordAdapter[Post]):
    """The server answers a new favorite with the favorited post (or nothing)."""

    def __init__(self) -> None:
        super().__init__(Post, "post")

    def parse(self, response: Any, params: dict[str, Any]) -> Post | None:
        if response is None:
            return None
        return super().parse(response, params)
