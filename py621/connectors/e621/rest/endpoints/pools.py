"""e621 pool endpoints: search listing and single pool lookup.

Both return bare JSON (an array for the listing, an object for the lookup).
"""

from __future__ import annotations

from typing import Any

from py621.connectors.e621.config import MAX_PAGE_SIZE, POOLS_PATH
from py621.models import Pool
from py621.runtime.rest import RestEndpointSpec

from .common import RecordAdapter, RecordListAdapter, build_listing_query


def build_path(params: dict[str, Any]) -> str:
    return POOLS_PATH


def build_show_path(params: dict[str, Any]) -> str:
    return f"/pools/{int(params['id'])}.json"


SPEC = RestEndpointSpec(
    id="pools",
    method="GET",
    build_path=build_path,
    build_query=build_listing_query,
    max_page_size=MAX_PAGE_SIZE["pools"],
)

SHOW_SPEC = RestEndpointSpec(
    id="pool_show",
    method="GET",
    build_path=build_show_path,
)


class Adapter(RecordListAdapter[Pool]):
    def __init__(self) -> None:
        super().__init__(Pool, "pools")


class ShowAdapter(RecordAdapter[Pool]):
    def __init__(self) -> None:
        super().__init__(Pool)
