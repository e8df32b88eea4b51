"""HTTP client helper."""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass
from typing import Any

import aiohttp

from ...core.exceptions import TransportError, UsageError


@dataclass(frozen=True)
class HTTPResponse:
    """Status and raw body of a completed request."""

    status: int
    body: bytes
    url: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class HTTPClient:
    """Async HTTP client wrapper.

    An ``aiohttp.ClientSession`` only works on the event loop it was created
    on, so one session is kept per running loop. The same client can then be
    used from successive ``asyncio.run`` calls or from loops in other threads.
    Sessions left behind by loops that have since closed are dropped.
    """

    def __init__(self, timeout: float = 30.0) -> None:
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._sessions: dict[asyncio.AbstractEventLoop, aiohttp.ClientSession] = {}
        self._lock = threading.Lock()

    def _prune(self) -> None:
        # Caller holds the lock.
        for loop in [loop for loop in self._sessions if loop.is_closed()]:
            del self._sessions[loop]

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create the session of the running event loop.

        Raises:
            UsageError: If called outside a running event loop
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise UsageError("HTTPClient.session needs a running event loop") from e

        with self._lock:
            self._prune()
            session = self._sessions.get(loop)
            if session is None or session.closed:
                session = aiohttp.ClientSession(timeout=self.timeout)
                self._sessions[loop] = session
            return session

    async def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        *,
        data: dict[str, Any] | None = None,
        auth: aiohttp.BasicAuth | None = None,
    ) -> HTTPResponse:
        """Send a request and read the whole body.

        The status is returned as-is; only failures to send the request or
        read the response raise.

        Raises:
            TransportError: If the request could not be completed
        """
        try:
            async with self.session.request(
                method, url, headers=headers, data=data, auth=auth
            ) as response:
                body = await response.read()
                return HTTPResponse(status=response.status, body=body, url=str(response.url))
        except (aiohttp.ClientError, TimeoutError) as e:
            raise TransportError(f"Couldn't send request: {e}") from e

    async def close(self) -> None:
        """Close the session of the running loop."""
        loop = asyncio.get_running_loop()
        with self._lock:
            self._prune()
            session = self._sessions.pop(loop, None)
        if session is not None and not session.closed:
            await session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
