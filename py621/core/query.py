"""Search filters for paginated listings.

Every filter knows two things the pagination layer needs:
    - ``is_ordered``: results come in a server-defined order other than the
      record id, so the listing can only be resumed by page number
    - ``to_params()``: the query parameters selecting the matching records

Unordered filters paginate with ``Before``/``After`` cursors, which stay
correct while new records are inserted on the server.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from .cursor import Cursor
from .enums import PoolCategory, PoolOrder, TagCategory, TagOrder
from .exceptions import UsageError

ORDER_PREFIX = "order:"


class SearchFilter(Protocol):
    """Interface shared by all filters accepted by the pagination layer."""

    @property
    def is_ordered(self) -> bool: ...

    def to_params(self) -> dict[str, str]: ...

    def default_cursor(self) -> Cursor | None: ...


def _bool_param(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True)
class TagFilter:
    """Post search terms (tags, metatags, ``order:`` directives)."""

    terms: tuple[str, ...] = ()

    def __init__(self, terms: str | Iterable[str] = ()) -> None:
        if isinstance(terms, str):
            terms = terms.split()
        object.__setattr__(self, "terms", tuple(t for t in terms if t))

    @property
    def is_ordered(self) -> bool:
        return any(term.startswith(ORDER_PREFIX) for term in self.terms)

    def to_param(self) -> str:
        return " ".join(self.terms)

    def to_params(self) -> dict[str, str]:
        return {"tags": self.to_param()}

    def default_cursor(self) -> Cursor | None:
        return Cursor.page(1) if self.is_ordered else None


@dataclass(frozen=True)
class IdFilter:
    """Matches records whose id is in the given set."""

    ids: tuple[int, ...]

    def __init__(self, ids: Iterable[int]) -> None:
        object.__setattr__(self, "ids", tuple(int(i) for i in ids))

    @property
    def is_ordered(self) -> bool:
        return False

    def to_params(self) -> dict[str, str]:
        return {"tags": "id:" + ",".join(str(i) for i in self.ids)}

    def default_cursor(self) -> Cursor | None:
        return None


@dataclass(frozen=True)
class PoolSearch:
    """Pool search parameters.

    Without an ``order`` the search is walked with Before cursors by
    descending pool id, the same way unordered post searches are, rather
    than by page number. Setting ``order`` switches to page numbers, and
    such a search can only be resumed from a page cursor.
    """

    name_matches: str | None = None
    ids: tuple[int, ...] = ()
    description_matches: str | None = None
    creator_name: str | None = None
    creator_id: int | None = None
    is_active: bool | None = None
    is_deleted: bool | None = None
    category: PoolCategory | None = None
    order: PoolOrder | None = None

    @property
    def is_ordered(self) -> bool:
        return self.order is not None

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.name_matches is not None:
            params["search[name_matches]"] = self.name_matches
        if self.ids:
            params["search[id]"] = ",".join(str(i) for i in self.ids)
        if self.description_matches is not None:
            params["search[description_matches]"] = self.description_matches
        if self.creator_name is not None:
            params["search[creator_name]"] = self.creator_name
        if self.creator_id is not None:
            params["search[creator_id]"] = str(self.creator_id)
        if self.is_active is not None:
            params["search[is_active]"] = _bool_param(self.is_active)
        if self.is_deleted is not None:
            params["search[is_deleted]"] = _bool_param(self.is_deleted)
        if self.category is not None:
            params["search[category]"] = PoolCategory(self.category).value
        if self.order is not None:
            params["search[order]"] = PoolOrder(self.order).value
        return params

    def default_cursor(self) -> Cursor | None:
        return Cursor.page(1) if self.is_ordered else None


# Orders that sort by descending id, which is what Before cursors walk anyway.
_ID_DESC_ORDERS = (TagOrder.ID_DESC, TagOrder.DATE)


@dataclass(frozen=True)
class TagQuery:
    """Tag search parameters.

    ``order=TagOrder.ID_ASC`` is served with ``After`` cursors starting at 0,
    and ``ID_DESC``/``DATE`` with ``Before`` cursors; the order parameter is
    not sent in either case. Any other order paginates by page number.
    """

    id: int | None = None
    order: TagOrder | None = None
    fuzzy_name_matches: str | None = None
    name_matches: str | None = None
    names: tuple[str, ...] = ()
    categories: tuple[TagCategory, ...] = ()
    hide_empty: bool = False
    has_wiki: bool = False
    has_artist: bool = False

    @property
    def is_ordered(self) -> bool:
        return self.order is not None and self.order not in (TagOrder.ID_ASC, *_ID_DESC_ORDERS)

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.id is not None:
            params["search[id]"] = str(self.id)
        if self.is_ordered:
            params["search[order]"] = TagOrder(self.order).value
        if self.fuzzy_name_matches is not None:
            params["search[fuzzy_name_matches]"] = self.fuzzy_name_matches
        if self.name_matches is not None:
            params["search[name_matches]"] = self.name_matches
        if self.names:
            params["search[name]"] = ",".join(self.names)
        if self.categories:
            params["search[category]"] = ",".join(str(int(c)) for c in self.categories)
        if self.hide_empty:
            params["search[hide_empty]"] = "true"
        if self.has_wiki:
            params["search[has_wiki]"] = "true"
        if self.has_artist:
            params["search[has_artist]"] = "true"
        return params

    def default_cursor(self) -> Cursor | None:
        if self.is_ordered:
            return Cursor.page(1)
        if self.order == TagOrder.ID_ASC:
            return Cursor.after(0)
        return None


@dataclass(frozen=True)
class SearchPlan:
    """A validated filter together with the cursor its listing starts from."""

    filter: SearchFilter
    start: Cursor | None = field(default=None)


def plan_search(search_filter: SearchFilter, cursor: Cursor | None = None) -> SearchPlan:
    """Validate a filter/cursor combination and resolve the starting cursor.

    Raises:
        UsageError: If an ordered filter is combined with an id-relative cursor,
            or an unordered filter with a page cursor
    """
    if cursor is None:
        return SearchPlan(search_filter, search_filter.default_cursor())

    if search_filter.is_ordered and cursor.is_relative:
        raise UsageError(
            f"ordered searches can only be resumed by page number, got cursor {cursor}"
        )
    if not search_filter.is_ordered and cursor.is_page:
        raise UsageError(
            f"unordered searches are resumed relative to a record id, got page cursor {cursor}"
        )
    return SearchPlan(search_filter, cursor)
