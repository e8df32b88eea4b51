"""Shared fixtures for unit tests: record payloads and a scripted transport."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from py621.runtime.pagination import PagedFetcher
from py621.runtime.rest import RestRunner


def post_payload(post_id: int, **overrides: Any) -> dict[str, Any]:
    """Minimal post JSON as sent by /posts.json."""
    payload: dict[str, Any] = {
        "id": post_id,
        "created_at": "2024-01-01T12:00:00.000-05:00",
        "updated_at": "2024-01-02T12:00:00.000-05:00",
        "file": {
            "width": 800,
            "height": 600,
            "ext": "png",
            "size": 12345,
            "md5": "0123456789abcdef0123456789abcdef",
            "url": f"https://static1.e621.net/data/{post_id}.png",
        },
        "preview": {"width": 150, "height": 112, "url": None},
        "sample": {"has": False},
        "score": {"up": 3, "down": -1, "total": 2},
        "tags": {"general": ["fluffy"], "species": ["canine"]},
        "rating": "s",
        "fav_count": 7,
    }
    payload.update(overrides)
    return payload


class ScriptedTransport:
    """Transport double answering GET requests from a responder function.

    The responder receives ``(path, params)`` and returns the JSON body, or
    an exception instance to raise.
    """

    def __init__(self, responder: Callable[[str, dict[str, Any]], Any]) -> None:
        self._responder = responder
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        params = dict(params or {})
        self.calls.append((path, params))
        result = self._responder(path, params)
        if isinstance(result, BaseException):
            raise result
        return result

    async def post(self, path: str, form: dict[str, Any]) -> Any:
        raise AssertionError("unexpected POST")


def post_pages(*pages: list[int] | BaseException) -> Callable[[str, dict[str, Any]], Any]:
    """Responder serving the given post id pages in order, then empty pages."""
    remaining = list(pages)

    def respond(path: str, params: dict[str, Any]) -> Any:
        if not remaining:
            return {"posts": []}
        page = remaining.pop(0)
        if isinstance(page, BaseException):
            return page
        return {"posts": [post_payload(i) for i in page]}

    return respond


def posts_by_id(path: str, params: dict[str, Any]) -> Any:
    """Responder answering ``id:`` lookups with one post per requested id."""
    tags = params["tags"]
    assert tags.startswith("id:")
    ids = [int(i) for i in tags[len("id:") :].split(",")]
    return {"posts": [post_payload(i) for i in ids]}


@pytest.fixture
def scripted():
    """Factory building a scripted transport and a fetcher on top of it."""

    def build(responder: Callable[[str, dict[str, Any]], Any]):
        transport = ScriptedTransport(responder)
        return transport, PagedFetcher(RestRunner(transport))

    return build


@pytest.fixture
def make_post():
    return post_payload


@pytest.fixture
def pages():
    """Factory for responders serving post id pages in order."""
    return post_pages


@pytest.fixture
def by_id():
    return posts_by_id
