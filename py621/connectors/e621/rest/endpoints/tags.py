"""e621 tag search endpoint.

``/tags.json`` returns a bare array, except when nothing matches: then it
returns ``{"tags": []}`` instead of an empty array.
"""

from __future__ import annotations

from typing import Any

from py621.connectors.e621.config import MAX_PAGE_SIZE, TAGS_PATH
from py621.models import Tag
from py621.runtime.rest import RestEndpointSpec

from .common import RecordListAdapter, build_listing_query


def build_path(params: dict[str, Any]) -> str:
    return TAGS_PATH


SPEC = RestEndpointSpec(
    id="tags",
    method="GET",
    build_path=build_path,
    build_query=build_listing_query,
    max_page_size=MAX_PAGE_SIZE["tags"],
)


class Adapter(RecordListAdapter[Tag]):
    def __init__(self) -> None:
        super().__init__(Tag, "tags")
