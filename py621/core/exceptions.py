"""Custom exception hierarchy."""

from __future__ import annotations

# Generic reasons for status codes when the server does not send one.
HTTP_STATUS_REASONS: dict[int, str] = {
    200: "OK: Request was successful",
    403: "Forbidden: Access denied. May indicate that your request lacks a User-Agent header.",
    404: "Not Found",
    412: "Precondition failed",
    420: "Invalid Record: Record could not be saved",
    421: "User Throttled: User is throttled, try again later",
    422: "Locked: The resource is locked and cannot be modified",
    423: "Already Exists: Resource already exists",
    424: "Invalid Parameters: The given parameters were invalid",
    500: "Internal Server Error: Some unknown error occurred on the server",
    502: "Bad Gateway: A gateway server received an invalid response from the e621 servers",
    503: (
        "Service Unavailable: Server cannot currently handle the request or you have "
        "exceeded the request rate limit. Try again later or decrease your rate of requests."
    ),
    520: "Unknown Error: Unexpected server response which violates protocol",
    522: (
        "Origin Connection Time-out: CloudFlare's attempt to connect to the e621 "
        "servers timed out"
    ),
    524: (
        "Origin Connection Time-out: A connection was established between CloudFlare "
        "and the e621 servers, but it timed out before an HTTP response was received"
    ),
    525: "SSL Handshake Failed: The SSL handshake between CloudFlare and the e621 servers failed",
}


class Py621Error(Exception):
    """Base exception for all library errors."""

    pass


class LimitExceededError(Py621Error):
    """A request parameter is above the maximum the server accepts.

    Raised before any request is sent.
    """

    def __init__(self, option: str, value: int, maximum: int) -> None:
        super().__init__(
            f"{option}:{value} is above the maximum value allowed in this context ({maximum})"
        )
        self.option = option
        self.value = value
        self.maximum = maximum


class HttpError(Py621Error):
    """Non-2xx response from the API."""

    def __init__(self, status: int, reason: str | None = None, url: str | None = None) -> None:
        self.status = status
        self.url = url
        self.reason = reason if reason is not None else HTTP_STATUS_REASONS.get(status, "")
        message = f"HTTP error {status}"
        if self.reason:
            message = f"{message}: {self.reason}"
        super().__init__(message)

    @property
    def is_rate_limited(self) -> bool:
        """Whether the server rejected the request for going too fast."""
        return self.status == 503


class TransportError(Py621Error):
    """The request could not be sent or its response could not be read."""

    pass


class SerializationError(Py621Error):
    """A response body did not decode into the expected records."""

    pass


class UsageError(Py621Error, ValueError):
    """Invalid arguments supplied by the caller."""

    pass


class CannotCreateClientError(Py621Error):
    """Client construction failed (e.g. missing User-Agent)."""

    pass
