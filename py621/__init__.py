"""py621 - async client for the e621/e926 image board API."""

from .api import Client
from .core import (
    CannotCreateClientError,
    Cursor,
    CursorKind,
    HttpError,
    IdFilter,
    LimitExceededError,
    PoolCategory,
    PoolOrder,
    PoolSearch,
    Py621Error,
    Rating,
    SerializationError,
    TagCategory,
    TagFilter,
    TagOrder,
    TagQuery,
    TransportError,
    UsageError,
)
from .models import (
    File,
    Pool,
    Post,
    PostFlags,
    PostTags,
    Preview,
    Record,
    Relationships,
    Sample,
    Score,
    Tag,
)
from .runtime.pagination import BatchStream, SearchStream, StreamState
from .runtime.rest import NullRateLimiter, RateLimiter

__version__ = "0.1.0"

__all__ = [
    # Client
    "Client",
    # Queries
    "Cursor",
    "CursorKind",
    "TagFilter",
    "IdFilter",
    "PoolSearch",
    "TagQuery",
    # Enums
    "Rating",
    "TagCategory",
    "TagOrder",
    "PoolCategory",
    "PoolOrder",
    # Models
    "Record",
    "Post",
    "File",
    "Preview",
    "Sample",
    "Score",
    "PostTags",
    "PostFlags",
    "Relationships",
    "Pool",
    "Tag",
    # Streams
    "SearchStream",
    "BatchStream",
    "StreamState",
    "RateLimiter",
    "NullRateLimiter",
    # Exceptions
    "Py621Error",
    "LimitExceededError",
    "HttpError",
    "TransportError",
    "SerializationError",
    "UsageError",
    "CannotCreateClientError",
]
