"""Core components."""

from .cursor import Cursor, CursorKind
from .enums import PoolCategory, PoolOrder, Rating, TagCategory, TagOrder
from .exceptions import (
    HTTP_STATUS_REASONS,
    CannotCreateClientError,
    HttpError,
    LimitExceededError,
    Py621Error,
    SerializationError,
    TransportError,
    UsageError,
)
from .query import (
    IdFilter,
    PoolSearch,
    SearchFilter,
    SearchPlan,
    TagFilter,
    TagQuery,
    plan_search,
)

__all__ = [
    "Cursor",
    "CursorKind",
    "Rating",
    "TagCategory",
    "TagOrder",
    "PoolCategory",
    "PoolOrder",
    "Py621Error",
    "LimitExceededError",
    "HttpError",
    "TransportError",
    "SerializationError",
    "UsageError",
    "CannotCreateClientError",
    "HTTP_STATUS_REASONS",
    "SearchFilter",
    "TagFilter",
    "IdFilter",
    "PoolSearch",
    "TagQuery",
    "SearchPlan",
    "plan_search",
]
