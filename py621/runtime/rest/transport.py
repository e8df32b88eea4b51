"""REST transport: URL building, credentials, rate limiting and error mapping.

Every request the library sends goes through ``RESTTransport``, which makes
the rate limiter the single gate in front of the network.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote, urlencode

import aiohttp

from ...core.exceptions import (
    CannotCreateClientError,
    HttpError,
    SerializationError,
    TransportError,
)
from ..telemetry import log_request_failed
from .http_client import HTTPClient, HTTPResponse
from .rate_limiter import NullRateLimiter, RateLimiter


@dataclass(frozen=True)
class TransportConfig:
    """Connection settings for one client.

    Attributes:
        base_url: Scheme and host of the API (e.g. "https://e926.net")
        user_agent: Value of the User-Agent header. Required and non-empty.
        timeout: Total timeout of a single request, in seconds
        cooldown: Minimum spacing between request starts, in seconds
        rate_limit: Whether to enforce the cooldown at all
    """

    base_url: str
    user_agent: str
    timeout: float = 30.0
    cooldown: float = 0.6
    rate_limit: bool = True

    def validate(self) -> None:
        """Fail fast on settings that would get every request rejected.

        Raises:
            CannotCreateClientError: If the User-Agent is empty or not a valid
                header value, or the base URL is not absolute
        """
        if not self.user_agent:
            raise CannotCreateClientError("Couldn't create client: User Agent mustn't be empty")
        if any(c in self.user_agent for c in "\r\n\0"):
            raise CannotCreateClientError("Couldn't create client: Invalid header value")
        if not self.base_url.startswith(("http://", "https://")):
            raise CannotCreateClientError(
                f"Couldn't create client: base URL must be absolute, got {self.base_url!r}"
            )
        if self.timeout <= 0:
            raise CannotCreateClientError("Couldn't create client: timeout must be positive")


def encode_query(params: dict[str, Any] | list[tuple[str, Any]]) -> str:
    """Percent-encode query parameters (spaces become ``%20``)."""
    items = params.items() if isinstance(params, dict) else params
    return urlencode([(k, str(v)) for k, v in items], quote_via=quote)


def extract_reason(body: bytes) -> str | None:
    """Read the ``reason`` field of a JSON error body, if there is one."""
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if isinstance(payload, dict) and isinstance(payload.get("reason"), str):
        return payload["reason"]
    return None


class RESTTransport:
    """Rate-limited JSON transport over ``HTTPClient``."""

    def __init__(
        self,
        config: TransportConfig,
        *,
        http: HTTPClient | None = None,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        config.validate()
        self.config = config
        self._http = http or HTTPClient(timeout=config.timeout)
        if rate_limiter is None:
            rate_limiter = RateLimiter(config.cooldown) if config.rate_limit else NullRateLimiter()
        self.rate_limiter = rate_limiter
        self._headers = {"User-Agent": config.user_agent}
        self._login: tuple[str, str] | None = None

    def login(self, username: str, api_key: str) -> None:
        """Send the given credentials with every subsequent request."""
        self._login = (username, api_key)

    def logout(self) -> None:
        self._login = None

    @property
    def is_logged_in(self) -> bool:
        return self._login is not None

    def url(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        *,
        credentials: bool = True,
    ) -> str:
        """Absolute URL for ``path`` with endpoint and, unless disabled, credential parameters."""
        pairs: list[tuple[str, Any]] = list((params or {}).items())
        if credentials and self._login is not None:
            username, api_key = self._login
            pairs += [("login", username), ("api_key", api_key)]

        url = self.config.base_url.rstrip("/") + "/" + path.lstrip("/")
        if pairs:
            url = f"{url}?{encode_query(pairs)}"
        return url

    async def _send(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        *,
        data: dict[str, Any] | None = None,
        auth: aiohttp.BasicAuth | None = None,
    ) -> HTTPResponse:
        url = self.url(path, params)
        # Failures are logged without the api key.
        public_url = self.url(path, params, credentials=False)

        async def request() -> HTTPResponse:
            return await self._http.send(method, url, dict(self._headers), data=data, auth=auth)

        try:
            response = await self.rate_limiter.acquire_and_run(request)
        except TransportError as e:
            log_request_failed(
                method=method,
                url=public_url,
                status=None,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise

        if not response.ok:
            error = HttpError(response.status, extract_reason(response.body), url=public_url)
            log_request_failed(
                method=method,
                url=public_url,
                status=response.status,
                error_type=type(error).__name__,
                error_message=str(error),
            )
            raise error
        return response

    @staticmethod
    def _decode(response: HTTPResponse) -> Any:
        # The body was read once as bytes; error mapping in _send used the same buffer.
        try:
            return json.loads(response.body)
        except ValueError as e:
            raise SerializationError(f"Serialization error: {e}") from e

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET ``path`` and return the decoded JSON body.

        Raises:
            HttpError: On non-2xx responses
            TransportError: If the request could not be sent
            SerializationError: If the body is not JSON
        """
        response = await self._send("GET", path, params)
        return self._decode(response)

    async def post(self, path: str, form: dict[str, Any]) -> Any:
        """POST a form-encoded body and return the decoded JSON response.

        Credentials, when set, are also sent as basic auth.
        """
        auth = aiohttp.BasicAuth(*self._login) if self._login is not None else None
        response = await self._send("POST", path, data=form, auth=auth)
        if not response.body.strip():
            return None
        return self._decode(response)

    async def delete(self, path: str) -> None:
        """Delete a resource.

        Sent as a form POST with ``_method=delete`` since the server's CORS
        headers do not allow HTTP DELETE.
        """
        auth = aiohttp.BasicAuth(*self._login) if self._login is not None else None
        await self._send("POST", path, data={"_method": "delete"}, auth=auth)

    async def close(self) -> None:
        await self._http.close()
