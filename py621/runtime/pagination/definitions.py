"""Pagination data structures.

This module defines the structures exchanged between the page fetcher and
the lazy streams built on top of it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

from ...core.cursor import Cursor
from ...models import Record
from ..rest import ResponseAdapter, RestEndpointSpec

R = TypeVar("R", bound=Record)


@dataclass(frozen=True)
class Listing(Generic[R]):
    """A paginated endpoint together with the adapter decoding its pages.

    Attributes:
        spec: Endpoint definition (path/query builders, max page size)
        adapter: Adapter turning a response body into a list of records
    """

    spec: RestEndpointSpec
    adapter: ResponseAdapter

    @property
    def id(self) -> str:
        return self.spec.id


@dataclass
class PageResult(Generic[R]):
    """One decoded page.

    Attributes:
        records: Records in server order
        cursor: Cursor the page was requested with (None for an unset cursor)
        next_cursor: Cursor of the following page, None when the page is empty
    """

    records: list[R]
    cursor: Cursor | None = None
    next_cursor: Cursor | None = None

    @property
    def is_empty(self) -> bool:
        return not self.records


class StreamState(str, Enum):
    """Lifecycle of a lazy record stream."""

    FETCHING = "fetching"
    HAS_RECORDS = "has_records"
    EXHAUSTED = "exhausted"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (StreamState.EXHAUSTED, StreamState.FAILED)


@dataclass
class PageBuffer(Generic[R]):
    """Records of the current page, stored reversed so popping from the end
    hands them out in server order."""

    _items: list[R] = field(default_factory=list)

    def fill(self, records: list[R]) -> None:
        self._items = list(reversed(records))

    def pop(self) -> R:
        return self._items.pop()

    def __len__(self) -> int:
        return len(self._items)
