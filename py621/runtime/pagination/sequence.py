"""Lazy, transparently paginated record streams.

Architecture:
    ``SearchStream`` is an async iterator over the records matching a filter.
    It buffers one page at a time and asks ``PagedFetcher`` for the next
    page only when the buffer is empty and the caller pulls again:

        FETCHING --non-empty page--> HAS_RECORDS --last record--> FETCHING
        FETCHING --empty page------> EXHAUSTED
        FETCHING --error-----------> FAILED

    ``EXHAUSTED`` and ``FAILED`` are absorbing. A failure is surfaced exactly
    once (raised, or returned as an item with ``return_exceptions=True``);
    records produced before it stay valid.

Design Decisions:
    - Lazy refetch: at most one request is ever outstanding, and a stream
      that is simply dropped leaves nothing pending
    - The cursor only advances after a page was decoded, so a pull that is
      cancelled mid-request can be retried from the same position
    - Not restartable: build a new stream to run the search again
"""

from __future__ import annotations

import asyncio
from typing import Generic

from ...core.cursor import Cursor
from ...core.query import SearchFilter, plan_search
from ..telemetry import log_search_exhausted
from .definitions import Listing, PageBuffer, R, StreamState
from .fetcher import PagedFetcher, check_page_size


class SearchStream(Generic[R]):
    """Async iterator over every record matching a filter.

    Args:
        fetcher: Page fetcher bound to a client's transport
        listing: Endpoint and adapter to paginate
        search_filter: Filter selecting the records
        cursor: Where to start (default: page 1 for ordered filters, the
            newest record for unordered ones)
        limit: Page size
        return_exceptions: Return the terminal error as the last item
            instead of raising it

    Raises:
        UsageError: If the cursor does not fit the filter (ordered filters
            need page cursors, unordered ones id-relative cursors)
        LimitExceededError: If ``limit`` is above the endpoint maximum

    Example:
        ```python
        async for post in client.post_search(["fluffy", "rating:s"]):
            print(post.id)
        ```
    """

    def __init__(
        self,
        fetcher: PagedFetcher,
        listing: Listing[R],
        search_filter: SearchFilter,
        *,
        cursor: Cursor | None = None,
        limit: int,
        return_exceptions: bool = False,
    ) -> None:
        check_page_size(listing, limit)
        plan = plan_search(search_filter, cursor)

        self._fetcher = fetcher
        self._listing = listing
        self._filter = plan.filter
        self._cursor = plan.start
        self._limit = limit
        self._return_exceptions = return_exceptions

        self._buffer: PageBuffer[R] = PageBuffer()
        self._state = StreamState.FETCHING
        self._error: BaseException | None = None
        self._pages = 0
        self._produced = 0
        self._pull_lock = asyncio.Lock()

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def cursor(self) -> Cursor | None:
        """Cursor of the next page to fetch."""
        return self._cursor

    @property
    def filter(self) -> SearchFilter:
        return self._filter

    @property
    def pages_fetched(self) -> int:
        return self._pages

    def __aiter__(self) -> SearchStream[R]:
        return self

    async def __anext__(self) -> R:
        async with self._pull_lock:
            return await self._next()

    async def _next(self) -> R:
        if self._state == StreamState.FAILED:
            return self._surface_error()
        if self._state == StreamState.EXHAUSTED:
            raise StopAsyncIteration

        if not self._buffer:
            self._state = StreamState.FETCHING
            try:
                page = await self._fetcher.fetch_page(
                    self._listing, self._filter, self._cursor, limit=self._limit
                )
            except Exception as e:
                self._state = StreamState.FAILED
                self._error = e
                return self._surface_error()

            if page.is_empty:
                self._state = StreamState.EXHAUSTED
                log_search_exhausted(
                    endpoint_id=self._listing.id, pages=self._pages, records=self._produced
                )
                raise StopAsyncIteration

            self._pages += 1
            self._buffer.fill(page.records)
            self._cursor = page.next_cursor
            self._state = StreamState.HAS_RECORDS

        record = self._buffer.pop()
        self._produced += 1
        if not self._buffer:
            self._state = StreamState.FETCHING
        return record

    def _surface_error(self):
        error, self._error = self._error, None
        if error is None:
            raise StopAsyncIteration
        if self._return_exceptions:
            return error
        raise error

    async def collect(self, limit: int | None = None) -> list[R]:
        """Pull records into a list, stopping after ``limit`` records if given.

        No page beyond the one holding the ``limit``-th record is requested.
        """
        out: list[R] = []
        if limit is not None and limit <= 0:
            return out
        async for record in self:
            out.append(record)
            if limit is not None and len(out) >= limit:
                break
        return out

    async def aclose(self) -> None:
        """Stop the stream; later pulls end immediately."""
        self._buffer.fill([])
        self._error = None
        if not self._state.is_terminal:
            self._state = StreamState.EXHAUSTED

    def __repr__(self) -> str:
        return (
            f"SearchStream(endpoint={self._listing.id!r}, state={self._state.value}, "
            f"cursor={self._cursor})"
        )
