"""Record lookups by id, in fixed-size batches.

``BatchStream`` pulls ids from the caller's iterable one batch at a time,
fetches each batch with a single ``id:`` request and hands out the decoded
records before pulling the next batch.

Note:
    The server decides the order of records within a batch; it does not
    follow the order of the requested ids and is not guaranteed to be stable
    across identical requests. Sort the results if order matters.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator
from typing import Generic

from ...core.exceptions import UsageError
from ...core.query import IdFilter
from ..telemetry import log_batch_requested
from .definitions import Listing, PageBuffer, R, StreamState
from .fetcher import PagedFetcher, check_page_size


class BatchStream(Generic[R]):
    """Async iterator over the records with the given ids.

    Args:
        fetcher: Page fetcher bound to a client's transport
        listing: Endpoint and adapter used for the lookups
        ids: Record ids, as a sync or async iterable, consumed lazily
        batch_size: Maximum number of ids per request
        return_exceptions: Return the terminal error as the last item
            instead of raising it

    Raises:
        LimitExceededError: If ``batch_size`` is above the endpoint maximum
    """

    def __init__(
        self,
        fetcher: PagedFetcher,
        listing: Listing[R],
        ids: Iterable[int] | AsyncIterable[int],
        *,
        batch_size: int = 100,
        return_exceptions: bool = False,
    ) -> None:
        check_page_size(listing, batch_size)

        self._fetcher = fetcher
        self._listing = listing
        self._batch_size = batch_size
        self._return_exceptions = return_exceptions

        self._sync_ids: Iterator[int] | None = None
        self._async_ids: AsyncIterator[int] | None = None
        if isinstance(ids, AsyncIterable):
            self._async_ids = aiter(ids)
        elif isinstance(ids, Iterable):
            self._sync_ids = iter(ids)
        else:
            raise UsageError(f"ids must be an iterable of integers, got {type(ids).__name__}")

        self._buffer: PageBuffer[R] = PageBuffer()
        self._state = StreamState.FETCHING
        self._error: BaseException | None = None
        self._batches = 0
        self._pull_lock = asyncio.Lock()

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def batches_fetched(self) -> int:
        return self._batches

    async def _next_batch(self) -> list[int]:
        batch: list[int] = []
        if self._sync_ids is not None:
            for record_id in self._sync_ids:
                batch.append(int(record_id))
                if len(batch) >= self._batch_size:
                    break
        elif self._async_ids is not None:
            async for record_id in self._async_ids:
                batch.append(int(record_id))
                if len(batch) >= self._batch_size:
                    break
        return batch

    def __aiter__(self) -> BatchStream[R]:
        return self

    async def __anext__(self) -> R:
        async with self._pull_lock:
            return await self._next()

    async def _next(self) -> R:
        if self._state == StreamState.FAILED:
            return self._surface_error()
        if self._state == StreamState.EXHAUSTED:
            raise StopAsyncIteration

        # A batch may legitimately come back empty (unknown or hidden ids), so
        # keep pulling batches until one has records or the ids run out.
        while not self._buffer:
            self._state = StreamState.FETCHING
            try:
                ids = await self._next_batch()
                if not ids:
                    self._state = StreamState.EXHAUSTED
                    raise StopAsyncIteration

                log_batch_requested(
                    endpoint_id=self._listing.id, batch_index=self._batches, ids=len(ids)
                )
                page = await self._fetcher.fetch_page(
                    self._listing, IdFilter(ids), None, limit=self._batch_size
                )
            except StopAsyncIteration:
                raise
            except Exception as e:
                self._state = StreamState.FAILED
                self._error = e
                return self._surface_error()

            self._batches += 1
            self._buffer.fill(page.records)
            if self._buffer:
                self._state = StreamState.HAS_RECORDS

        record = self._buffer.pop()
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

    async def collect(self) -> list[R]:
        """Pull every remaining record into a list."""
        return [record async for record in self]

    async def aclose(self) -> None:
        """Stop the stream; later pulls end immediately and no more ids are read."""
        self._buffer.fill([])
        self._error = None
        if not self._state.is_terminal:
            self._state = StreamState.EXHAUSTED

    def __repr__(self) -> str:
        return (
            f"BatchStream(endpoint={self._listing.id!r}, state={self._state.value}, "
            f"batch_size={self._batch_size})"
        )
