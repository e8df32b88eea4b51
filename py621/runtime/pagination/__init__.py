"""Page fetching and lazy record streams."""

from .batching import BatchStream
from .definitions import Listing, PageBuffer, PageResult, StreamState
from .fetcher import PagedFetcher, check_page_size, next_cursor
from .sequence import SearchStream

__all__ = [
    "BatchStream",
    "Listing",
    "PageBuffer",
    "PageResult",
    "PagedFetcher",
    "SearchStream",
    "StreamState",
    "check_page_size",
    "next_cursor",
]
