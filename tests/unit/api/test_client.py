"""Unit tests for the Client facade."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock
from urllib.parse import parse_qs, urlsplit

import aiohttp
import pytest

from py621 import Client, Post, SearchStream
from py621.core import CannotCreateClientError, Cursor, LimitExceededError, TagQuery, UsageError
from py621.runtime.rest import HTTPResponse, NullRateLimiter

UA = "py621-tests/0.1 (by tester)"


def offline(client: Client, *bodies: object, status: int = 200) -> MagicMock:
    """Replace the client's HTTP layer with a mock answering ``bodies`` in order."""
    queue = list(bodies)

    async def send(method, url, headers=None, *, data=None, auth=None):
        body = queue.pop(0) if queue else {"posts": []}
        raw = b"" if body is None else json.dumps(body).encode()
        return HTTPResponse(status, raw, url)

    http = MagicMock()
    http.send = AsyncMock(side_effect=send)
    http.close = AsyncMock()
    client.transport._http = http
    client.transport.rate_limiter = NullRateLimiter()
    return http


def query_of(http: MagicMock, call: int = 0) -> dict[str, list[str]]:
    url = http.send.call_args_list[call].args[1]
    return parse_qs(urlsplit(url).query)


class TestClientConstruction:
    """Test Client construction."""

    def test_site_shortcuts(self):
        """Test e621/e926 shortcuts pick the base URL."""
        assert Client.e621(UA).transport.config.base_url == "https://e621.net"
        assert Client.e926(UA).transport.config.base_url == "https://e926.net"

    def test_settings_forwarded(self):
        """Test keyword settings reach the transport."""
        client = Client.e926(UA, cooldown=1.0, timeout=5.0)
        assert client.transport.rate_limiter.cooldown == 1.0
        assert client.transport.config.timeout == 5.0
        assert isinstance(Client.e926(UA, rate_limit=False).transport.rate_limiter, NullRateLimiter)

    def test_empty_user_agent(self):
        """Test a missing User-Agent fails at construction."""
        with pytest.raises(CannotCreateClientError):
            Client.e926("")


class TestClientSearch:
    """Test search methods."""

    @pytest.mark.asyncio
    async def test_post_search(self, make_post):
        """Test a post search sends tags and iterates every page."""
        client = Client.e926(UA)
        http = offline(client, {"posts": [make_post(3), make_post(2)]}, {"posts": []})

        stream = client.post_search(["fluffy", "rating:s"], per_page=2)
        assert isinstance(stream, SearchStream)
        posts = await stream.collect()

        assert [p.id for p in posts] == [3, 2]
        first = query_of(http, 0)
        assert first == {"limit": ["2"], "tags": ["fluffy rating:s"]}
        assert query_of(http, 1)["page"] == ["b2"]
        assert http.send.call_args_list[0].args[2] == {"User-Agent": UA}

    @pytest.mark.asyncio
    async def test_post_search_text_cursor(self):
        """Test a cursor given as text is parsed."""
        client = Client.e926(UA)
        http = offline(client, {"posts": []})
        await client.post_search("fox", cursor="b100").collect()
        assert query_of(http)["page"] == ["b100"]

    def test_post_search_rejects_bad_arguments(self):
        """Test invalid arguments fail before any request."""
        client = Client.e926(UA)
        http = offline(client)
        with pytest.raises(LimitExceededError):
            client.post_search("fox", per_page=321)
        with pytest.raises(UsageError):
            client.post_search("fox order:score", cursor=Cursor.before(5))
        with pytest.raises(UsageError):
            client.post_search("fox", cursor="b1x")
        http.send.assert_not_called()

    @pytest.mark.asyncio
    async def test_tag_search_empty_result(self):
        """Test the tags endpoint's empty object answer."""
        client = Client.e926(UA)
        http = offline(client, {"tags": []})
        tags = await client.tag_search(TagQuery(name_matches="zz*"), per_page=1000).collect()
        assert tags == []
        url = http.send.call_args.args[1]
        assert urlsplit(url).path == "/tags.json"
        assert query_of(http)["search[name_matches]"] == ["zz*"]

    @pytest.mark.asyncio
    async def test_pool_search_default(self):
        """Test listing all pools sends only the page size."""
        client = Client.e926(UA)
        http = offline(client, [])
        assert await client.pool_search().collect() == []
        assert query_of(http) == {"limit": ["320"]}

    @pytest.mark.asyncio
    async def test_get_posts(self, make_post):
        """Test id lookups are batched into id: searches."""
        client = Client.e926(UA)
        http = offline(client, {"posts": [make_post(2), make_post(1)]}, {"posts": [make_post(3)]})

        posts = await client.get_posts([1, 2, 3], batch_size=2).collect()

        assert sorted(p.id for p in posts) == [1, 2, 3]
        assert query_of(http, 0)["tags"] == ["id:1,2"]
        assert query_of(http, 1)["tags"] == ["id:3"]
        assert http.send.await_count == 2


class TestClientSingleRecords:
    """Test single record lookups and writes."""

    @pytest.mark.asyncio
    async def test_get_post(self, make_post):
        """Test a single post lookup."""
        client = Client.e926(UA)
        http = offline(client, {"post": make_post(42)})
        post = await client.get_post(42)
        assert isinstance(post, Post) and post.id == 42
        assert http.send.call_args.args[1] == "https://e926.net/posts/42.json"

    @pytest.mark.asyncio
    async def test_add_favorite(self, make_post):
        """Test favoriting sends an authenticated form POST."""
        client = Client.e926(UA)
        http = offline(client, {"post": make_post(7)})
        client.login("someone", "secret")

        post = await client.add_favorite(7)

        assert post.id == 7
        call = http.send.call_args
        assert call.args[0] == "POST"
        assert urlsplit(call.args[1]).path == "/favorites.json"
        assert call.kwargs["data"] == {"post_id": 7}
        assert call.kwargs["auth"] == aiohttp.BasicAuth("someone", "secret")
        assert query_of(http)["api_key"] == ["secret"]

    @pytest.mark.asyncio
    async def test_remove_favorite(self):
        """Test removing a favorite posts _method=delete."""
        client = Client.e926(UA)
        http = offline(client, None)
        client.login("someone", "secret")

        await client.remove_favorite(7)

        call = http.send.call_args
        assert urlsplit(call.args[1]).path == "/favorites/7.json"
        assert call.kwargs["data"] == {"_method": "delete"}

    @pytest.mark.asyncio
    async def test_logout(self, make_post):
        """Test credentials are dropped after logout."""
        client = Client.e926(UA)
        http = offline(client, {"post": make_post(1)})
        client.login("someone", "secret")
        client.logout()
        await client.get_post(1)
        assert "api_key" not in http.send.call_args.args[1]


class TestClientLifecycle:
    """Test resource cleanup."""

    @pytest.mark.asyncio
    async def test_context_manager_closes_once(self):
        """Test leaving the context closes the HTTP layer exactly once."""
        async with Client.e926(UA) as client:
            http = offline(client)
        await client.close()
        http.close.assert_awaited_once()
