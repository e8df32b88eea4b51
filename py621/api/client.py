"""High-level client for the e621/e926 API.

Architecture:
    ``Client`` is a facade over the REST runtime. It owns one transport (and
    with it one rate limiter shared by every request it issues) and turns
    method calls into endpoint specs, filters and lazy streams:

        Client.post_search -> SearchStream -> PagedFetcher -> RestRunner
                           -> RESTTransport -> RateLimiter -> HTTPClient

Design Decisions:
    - Search methods return streams synchronously; nothing is requested until
      the first record is pulled
    - Invalid arguments (page size, filter/cursor mix, User-Agent) fail at the
      call site before any network I/O
    - Transport injection allows testing without a network
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, Iterable
from typing import Any

from ..connectors.e621.config import (
    BASE_URLS,
    DEFAULT_PAGE_SIZE,
    DEFAULT_TIMEOUT,
    ID_BATCH_SIZE,
    REQUEST_COOLDOWN,
)
from ..connectors.e621.rest.endpoints import favorites, pools, posts, tags
from ..core.cursor import Cursor
from ..core.query import PoolSearch, TagFilter, TagQuery
from ..models import Pool, Post, Tag
from ..runtime.pagination import BatchStream, Listing, PagedFetcher, SearchStream
from ..runtime.rest import RESTTransport, RestRunner, TransportConfig

logger = logging.getLogger(__name__)

POSTS = Listing[Post](posts.SPEC, posts.Adapter())
POOLS = Listing[Pool](pools.SPEC, pools.Adapter())
TAGS = Listing[Tag](tags.SPEC, tags.Adapter())


class Client:
    """Client for one e621-compatible site.

    Args:
        base_url: Scheme and host of the site (e.g. "https://e926.net")
        user_agent: User-Agent sent with every request. The API rejects
            requests without a descriptive one.
        timeout: Total timeout of a single request, in seconds
        rate_limit: Space request starts by ``cooldown`` (disable only for
            servers without the 2 requests/second limit)
        cooldown: Minimum spacing between request starts, in seconds
        transport: Optional transport (creates one from the settings above
            if not provided)

    Raises:
        CannotCreateClientError: If the User-Agent is empty or invalid

    Example:
        >>> async with Client.e926("MyProject/1.0 (by username on e621)") as client:
        ...     async for post in client.post_search("fluffy rating:s"):
        ...         print(post.id, post.file.url)
    """

    def __init__(
        self,
        base_url: str,
        user_agent: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        rate_limit: bool = True,
        cooldown: float = REQUEST_COOLDOWN,
        transport: RESTTransport | None = None,
    ) -> None:
        if transport is None:
            config = TransportConfig(
                base_url=base_url,
                user_agent=user_agent,
                timeout=timeout,
                cooldown=cooldown,
                rate_limit=rate_limit,
            )
            transport = RESTTransport(config)
        self._transport = transport
        self._runner = RestRunner(transport)
        self._fetcher = PagedFetcher(self._runner)
        self._closed = False

    @classmethod
    def e621(cls, user_agent: str, **kwargs: Any) -> Client:
        """Client for e621.net."""
        return cls(BASE_URLS["e621"], user_agent, **kwargs)

    @classmethod
    def e926(cls, user_agent: str, **kwargs: Any) -> Client:
        """Client for e926.net, the safe-only mirror."""
        return cls(BASE_URLS["e926"], user_agent, **kwargs)

    @property
    def transport(self) -> RESTTransport:
        return self._transport

    def login(self, username: str, api_key: str) -> None:
        """Authenticate every subsequent request with the given API key."""
        self._transport.login(username, api_key)

    def logout(self) -> None:
        self._transport.logout()

    # Posts

    def post_search(
        self,
        tags: str | Iterable[str] | TagFilter,
        *,
        cursor: Cursor | str | None = None,
        per_page: int = DEFAULT_PAGE_SIZE,
        return_exceptions: bool = False,
    ) -> SearchStream[Post]:
        """Search posts by tags.

        Args:
            tags: Search terms, as a space-separated string, a list of terms
                or a ``TagFilter``
            cursor: Where to start (a ``Cursor`` or its text form, e.g. "b1234")
            per_page: Posts requested per page
            return_exceptions: Return a fetch error as the last item instead
                of raising it

        Returns:
            Lazy stream of matching posts

        Raises:
            UsageError: If the cursor does not fit the search
            LimitExceededError: If ``per_page`` is above 320
        """
        search_filter = tags if isinstance(tags, TagFilter) else TagFilter(tags)
        return SearchStream(
            self._fetcher,
            POSTS,
            search_filter,
            cursor=_as_cursor(cursor),
            limit=per_page,
            return_exceptions=return_exceptions,
        )

    def get_posts(
        self,
        ids: Iterable[int] | AsyncIterable[int],
        *,
        batch_size: int = ID_BATCH_SIZE,
        return_exceptions: bool = False,
    ) -> BatchStream[Post]:
        """Look up posts by id, ``batch_size`` ids per request.

        The order of the returned posts is decided by the server.
        """
        return BatchStream(
            self._fetcher,
            POSTS,
            ids,
            batch_size=batch_size,
            return_exceptions=return_exceptions,
        )

    async def get_post(self, post_id: int) -> Post:
        """Fetch a single post.

        Raises:
            HttpError: 404 if the post does not exist
        """
        return await self._runner.run(
            spec=posts.SHOW_SPEC, adapter=posts.ShowAdapter(), params={"id": post_id}
        )

    # Pools

    def pool_search(
        self,
        search: PoolSearch | None = None,
        *,
        cursor: Cursor | str | None = None,
        per_page: int = DEFAULT_PAGE_SIZE,
        return_exceptions: bool = False,
    ) -> SearchStream[Pool]:
        """Search pools. Without ``search``, every pool is listed, newest first."""
        return SearchStream(
            self._fetcher,
            POOLS,
            search or PoolSearch(),
            cursor=_as_cursor(cursor),
            limit=per_page,
            return_exceptions=return_exceptions,
        )

    async def get_pool(self, pool_id: int) -> Pool:
        """Fetch a single pool."""
        return await self._runner.run(
            spec=pools.SHOW_SPEC, adapter=pools.ShowAdapter(), params={"id": pool_id}
        )

    # Tags

    def tag_search(
        self,
        query: TagQuery | None = None,
        *,
        cursor: Cursor | str | None = None,
        per_page: int = DEFAULT_PAGE_SIZE,
        return_exceptions: bool = False,
    ) -> SearchStream[Tag]:
        """Search tags (up to 1000 per page)."""
        return SearchStream(
            self._fetcher,
            TAGS,
            query or TagQuery(),
            cursor=_as_cursor(cursor),
            limit=per_page,
            return_exceptions=return_exceptions,
        )

    # Favorites

    async def add_favorite(self, post_id: int) -> Post | None:
        """Favorite a post. Requires ``login()``.

        Returns:
            The favorited post, or None if the server sent no body
        """
        return await self._runner.run(
            spec=favorites.ADD_SPEC, adapter=favorites.AddAdapter(), params={"post_id": post_id}
        )

    async def remove_favorite(self, post_id: int) -> None:
        """Remove a post from the favorites. Requires ``login()``."""
        await self._transport.delete(favorites.build_delete_path({"post_id": post_id}))

    async def close(self) -> None:
        """Close the client and its HTTP session."""
        if self._closed:
            return
        self._closed = True
        logger.debug("Closing Client")
        await self._transport.close()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"Client(base_url={self._transport.config.base_url!r})"


def _as_cursor(cursor: Cursor | str | None) -> Cursor | None:
    if cursor is None or isinstance(cursor, Cursor):
        return cursor
    return Cursor.parse(cursor)
