"""e621 post endpoints: search listing and single post lookup.

``/posts.json`` wraps its results: ``{"posts": [...]}``.
``/posts/<id>.json`` wraps the record: ``{"post": {...}}``.
"""

from __future__ import annotations

from typing import Any

from py621.connectors.e621.config import MAX_PAGE_SIZE, POSTS_PATH
from py621.models import Post
from py621.runtime.rest import RestEndpointSpec

from .common import RecordAdapter, RecordListAdapter, build_listing_query


def build_path(params: dict[str, Any]) -> str:
    return POSTS_PATH


def build_show_path(params: dict[str, Any]) -> str:
    return f"/posts/{int(params['id'])}.json"


# Endpoint definitions
SPEC = RestEndpointSpec(
    id="posts",
    method="GET",
    build_path=build_path,
    build_query=build_listing_query,
    max_page_size=MAX_PAGE_SIZE["posts"],
)

SHOW_SPEC = RestEndpointSpec(
    id="post_show",
    method="GET",
    build_path=build_show_path,
)


class Adapter(RecordListAdapter[Post]):
    """Adapter for parsing a post listing into Post records."""

    def __init__(self) -> None:
        super().__init__(Post, "posts")


class ShowAdapter(RecordAdapter[Post]):
    """Adapter for parsing a single post."""

    def __init__(self) -> None:
        super().__init__(Post, "post")
