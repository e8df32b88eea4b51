"""Request spacing limiter.

Enforces a minimum delay between the start of consecutive requests issued
through one client, no matter how many streams, tasks or threads share it.

Architecture:
    Callers draw a ticket on arrival and are admitted strictly in ticket
    order. A caller may start only when its ticket is being served and the
    clock has reached ``next_allowed``, the last actual start (or the end of
    the last attempt) plus the cooldown. The check and the admission happen
    under one lock; the caller sleeps outside it and checks again on waking,
    so a waiter that wakes late (busy event loop, another thread holding the
    GIL) never starts within a cooldown of the request before it.

Design Decisions:
    - ``threading.Lock``: the critical section never awaits, so the same
      limiter is safe to share between event loops running in different
      threads
    - Start times are throttled, not concurrency: requests that already
      started keep running while the next one waits for its turn
    - Every attempt (success, error or cancellation) pushes ``next_allowed``
      to at least ``now + cooldown`` once it finishes
    - A waiter cancelled before starting gives up its ticket; the callers
      behind it move up
"""

from __future__ import annotations

import asyncio
import threading
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

from ..telemetry import log_rate_limit_wait

T = TypeVar("T")


class RateLimiter:
    """Cooldown gate shared by all requests of one client.

    Args:
        cooldown: Minimum spacing between request start times, in seconds
        clock: Monotonic clock returning seconds (injectable for tests)

    Example:
        ```python
        limiter = RateLimiter(cooldown=0.6)

        async def fetch(url):
            async with limiter:
                return await session.get(url)

        # Starts are spaced by at least 600 ms
        await asyncio.gather(*(fetch(u) for u in urls))
        ```
    """

    def __init__(
        self,
        cooldown: float = 0.6,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if cooldown < 0:
            raise ValueError("cooldown must not be negative")

        self._cooldown = cooldown
        self._clock = clock
        self._next_allowed: float | None = None
        self._lock = threading.Lock()
        # Ticket bookkeeping: tickets are drawn in arrival order and admitted
        # one by one; abandoned tickets are skipped.
        self._next_ticket = 0
        self._serving = 0
        self._abandoned: set[int] = set()

    @property
    def cooldown(self) -> float:
        """Minimum spacing between request starts, in seconds."""
        return self._cooldown

    @property
    def next_allowed(self) -> float | None:
        """Earliest instant the next request may start (None before the first request)."""
        with self._lock:
            return self._next_allowed

    @property
    def waiting(self) -> int:
        """Number of callers holding a ticket that has not started yet."""
        with self._lock:
            return self._next_ticket - self._serving - len(self._abandoned)

    def _take_ticket(self) -> int:
        with self._lock:
            ticket = self._next_ticket
            self._next_ticket += 1
            return ticket

    def _skip_abandoned(self) -> None:
        # Caller holds the lock.
        while self._serving in self._abandoned:
            self._abandoned.discard(self._serving)
            self._serving += 1

    def _try_start(self, ticket: int) -> tuple[bool, float]:
        """Admit ``ticket`` if it is its turn and the cooldown has passed.

        Returns:
            ``(True, start)`` when admitted, otherwise ``(False, wait)`` where
            ``wait`` is a lower bound of the remaining wait in seconds
        """
        with self._lock:
            self._skip_abandoned()
            now = self._clock()
            ready_at = now if self._next_allowed is None else self._next_allowed
            if ticket == self._serving and now >= ready_at:
                self._serving += 1
                self._next_allowed = now + self._cooldown
                return True, now
            ahead = ticket - self._serving
            return False, max(0.0, ready_at - now) + ahead * self._cooldown

    def _abandon(self, ticket: int) -> None:
        with self._lock:
            if ticket >= self._serving:
                self._abandoned.add(ticket)
                self._skip_abandoned()

    async def wait_until_permitted(self) -> float:
        """Wait until this caller's request is allowed to start.

        Returns:
            The instant (on the limiter's clock) the caller was admitted

        Raises:
            asyncio.CancelledError: If the waiting coroutine is cancelled. The
                ticket is given up and later callers move up.
        """
        ticket = self._take_ticket()
        logged = False
        try:
            while True:
                started, value = self._try_start(ticket)
                if started:
                    return value
                if not logged and value > 0:
                    log_rate_limit_wait(delay=value, cooldown=self._cooldown)
                    logged = True
                await asyncio.sleep(value)
        except BaseException:
            self._abandon(ticket)
            raise

    def record_attempt(self) -> None:
        """Mark the end of a request attempt, pushing the slot to ``now + cooldown``."""
        with self._lock:
            deadline = self._clock() + self._cooldown
            if self._next_allowed is None or deadline > self._next_allowed:
                self._next_allowed = deadline

    async def acquire_and_run(self, request: Callable[[], Awaitable[T]]) -> T:
        """Run ``request`` once the limiter allows it.

        Errors raised by ``request`` propagate untouched; the cooldown is
        recorded on every path.
        """
        await self.wait_until_permitted()
        try:
            return await request()
        finally:
            self.record_attempt()

    async def __aenter__(self) -> RateLimiter:
        await self.wait_until_permitted()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.record_attempt()

    def reset(self) -> None:
        """Forget the stored deadline so the next request starts immediately."""
        with self._lock:
            self._next_allowed = None

    def __repr__(self) -> str:
        return f"RateLimiter(cooldown={self._cooldown})"


class NullRateLimiter(RateLimiter):
    """Limiter that never waits. Used when rate limiting is turned off."""

    def __init__(self) -> None:
        super().__init__(cooldown=0.0)

    async def wait_until_permitted(self) -> float:
        return self._clock()

    def record_attempt(self) -> None:
        return None

    def __repr__(self) -> str:
        return "NullRateLimiter()"
