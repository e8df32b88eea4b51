"""Single page fetching and cursor advancement.

``PagedFetcher`` issues one rate-limited GET per call, decodes the page and
computes the cursor of the following page. It holds no pagination state;
streams own the cursor and feed it back in.
"""

from __future__ import annotations

from time import perf_counter
from typing import Any

from ...core.cursor import Cursor, CursorKind
from ...core.exceptions import LimitExceededError, UsageError
from ...core.query import SearchFilter
from ..rest import RestRunner
from ..telemetry import log_page_error, log_page_fetched
from .definitions import Listing, PageResult, R


def next_cursor(
    search_filter: SearchFilter, cursor: Cursor | None, records: list[Any]
) -> Cursor | None:
    """Cursor of the page following ``records``, or None if the page was empty.

    Raises:
        UsageError: If the cursor kind does not match the filter
    """
    if not records:
        return None

    if search_filter.is_ordered:
        if cursor is None:
            return Cursor.page(2)
        if cursor.kind != CursorKind.PAGE:
            raise UsageError(f"ordered search cannot continue from cursor {cursor}")
        return Cursor.page(cursor.value + 1)

    if cursor is None or cursor.kind == CursorKind.BEFORE:
        return Cursor.before(min(record.id for record in records))
    if cursor.kind == CursorKind.AFTER:
        return Cursor.after(max(record.id for record in records))
    raise UsageError(f"unordered search cannot continue from page cursor {cursor}")


def check_page_size(listing: Listing[Any], limit: int) -> None:
    """Reject page sizes the endpoint does not accept.

    Raises:
        LimitExceededError: If ``limit`` is above the endpoint maximum
        UsageError: If ``limit`` is not positive
    """
    if limit < 1:
        raise UsageError(f"page size must be at least 1, got {limit}")
    maximum = listing.spec.max_page_size
    if maximum is not None and limit > maximum:
        raise LimitExceededError("limit", limit, maximum)


class PagedFetcher:
    """Fetches single pages of a listing through the rate-limited transport."""

    def __init__(self, runner: RestRunner) -> None:
        self._runner = runner

    async def fetch_page(
        self,
        listing: Listing[R],
        search_filter: SearchFilter,
        cursor: Cursor | None,
        *,
        limit: int,
    ) -> PageResult[R]:
        """Fetch and decode one page.

        Args:
            listing: Endpoint and adapter to use
            search_filter: Filter selecting the records
            cursor: Where the page starts (None: first page, no ``page`` parameter)
            limit: Page size

        Returns:
            PageResult with the decoded records and the next cursor

        Raises:
            LimitExceededError: If ``limit`` is above the endpoint maximum
            HttpError: On non-2xx responses
            TransportError: If the request could not be sent
            SerializationError: If the page did not decode
        """
        check_page_size(listing, limit)

        params = {"filter": search_filter, "cursor": cursor, "limit": limit}
        started = perf_counter()
        try:
            records = await self._runner.run(
                spec=listing.spec, adapter=listing.adapter, params=params
            )
        except Exception as e:
            log_page_error(
                endpoint_id=listing.id,
                cursor=str(cursor) if cursor is not None else None,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise

        following = next_cursor(search_filter, cursor, records)
        log_page_fetched(
            endpoint_id=listing.id,
            cursor=str(cursor) if cursor is not None else None,
            next_cursor=str(following) if following is not None else None,
            records=len(records),
            latency_ms=(perf_counter() - started) * 1000.0,
        )
        return PageResult(records=records, cursor=cursor, next_cursor=following)
