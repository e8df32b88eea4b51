"""Unit tests for HTTPClient."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest
from aiohttp import test_utils, web

from py621.core import TransportError, UsageError
from py621.runtime.rest import HTTPClient, HTTPResponse


def fake_session(status: int = 200, body: bytes = b"{}", url: str = "https://e926.net/x"):
    response = MagicMock()
    response.status = status
    response.url = url
    response.read = AsyncMock(return_value=body)

    ctx = MagicMock()
    ctx.__aenter__ = AsyncMock(return_value=response)
    ctx.__aexit__ = AsyncMock(return_value=False)

    session = MagicMock()
    session.closed = False
    session.request = MagicMock(return_value=ctx)
    return session


class TestHTTPClientSession:
    """Test HTTPClient session management."""

    def test_init(self):
        """Test HTTPClient initialization."""
        client = HTTPClient(timeout=10.0)
        assert client.timeout.total == 10.0
        assert client._sessions == {}

    @pytest.mark.asyncio
    async def test_session_property_creates_session(self):
        """Test session property creates session when needed."""
        client = HTTPClient()
        session = client.session
        assert isinstance(session, aiohttp.ClientSession)
        assert client.session is session
        await client.close()

    @pytest.mark.asyncio
    async def test_session_recreated_after_close(self):
        """Test a closed session is replaced."""
        client = HTTPClient()
        first = client.session
        await client.close()
        second = client.session
        assert first is not second
        await client.close()

    @pytest.mark.asyncio
    async def test_context_manager(self):
        """Test HTTPClient as async context manager."""
        async with HTTPClient() as client:
            session = client.session
        assert session.closed

    def test_session_outside_event_loop_is_usage_error(self):
        """Test the session cannot be created without a running loop."""
        with pytest.raises(UsageError):
            HTTPClient().session

    @pytest.mark.asyncio
    async def test_session_of_closed_loop_is_dropped(self):
        """Test a session left behind by a finished loop is replaced."""
        client = HTTPClient()
        dead_loop = asyncio.new_event_loop()
        dead_loop.close()
        stale = fake_session()
        client._sessions[dead_loop] = stale

        session = client.session

        assert session is not stale
        assert list(client._sessions) == [asyncio.get_running_loop()]
        await client.close()
        assert client._sessions == {}

    def test_reused_across_event_loops(self):
        """Test one client serves requests from successive asyncio.run calls."""
        client = HTTPClient()

        async def pong(request: web.Request) -> web.Response:
            return web.Response(body=b"pong")

        async def round_trip(close: bool) -> tuple[int, bytes]:
            app = web.Application()
            app.router.add_get("/ping", pong)
            async with test_utils.TestServer(app) as server:
                response = await client.send("GET", str(server.make_url("/ping")))
            if close:
                await client.close()
            return response.status, response.body

        # The first loop finishes without closing its session.
        assert asyncio.run(round_trip(close=False)) == (200, b"pong")
        assert asyncio.run(round_trip(close=True)) == (200, b"pong")
        assert client._sessions == {}


class TestHTTPClientSend:
    """Test HTTPClient.send."""

    @pytest.mark.asyncio
    async def test_send_returns_status_and_body(self):
        """Test non-2xx statuses are returned, not raised."""
        client = HTTPClient()
        session = fake_session(status=404, body=b'{"reason":"not found"}')
        client._sessions[asyncio.get_running_loop()] = session

        response = await client.send("GET", "https://e926.net/x", {"User-Agent": "ua"})

        assert response == HTTPResponse(404, b'{"reason":"not found"}', "https://e926.net/x")
        assert not response.ok
        session.request.assert_called_once_with(
            "GET", "https://e926.net/x", headers={"User-Agent": "ua"}, data=None, auth=None
        )

    @pytest.mark.asyncio
    async def test_client_error_becomes_transport_error(self):
        """Test aiohttp failures are wrapped."""
        client = HTTPClient()
        session = fake_session()
        session.request.side_effect = aiohttp.ClientConnectionError("connection reset")
        client._sessions[asyncio.get_running_loop()] = session

        with pytest.raises(TransportError, match="connection reset"):
            await client.send("GET", "https://e926.net/x")

    @pytest.mark.asyncio
    async def test_timeout_becomes_transport_error(self):
        """Test timeouts are wrapped."""
        client = HTTPClient()
        session = fake_session()
        session.request.side_effect = TimeoutError()
        client._sessions[asyncio.get_running_loop()] = session

        with pytest.raises(TransportError):
            await client.send("GET", "https://e926.net/x")

    def test_response_text(self):
        """Test text() decodes the body."""
        assert HTTPResponse(200, "héllo".encode(), "u").text() == "héllo"
