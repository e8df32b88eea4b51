"""REST runtime abstractions."""

from .http_client import HTTPClient, HTTPResponse
from .rate_limiter import NullRateLimiter, RateLimiter
from .runner import ResponseAdapter, RestEndpointSpec, RestRunner
from .transport import RESTTransport, TransportConfig

__all__ = [
    "HTTPClient",
    "HTTPResponse",
    "RateLimiter",
    "NullRateLimiter",
    "RESTTransport",
    "TransportConfig",
    "RestRunner",
    "RestEndpointSpec",
    "ResponseAdapter",
]
