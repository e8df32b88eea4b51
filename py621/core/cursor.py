"""Pagination cursors.

A cursor tells the server where a listing should resume: at an absolute page
number, or relative to a record id. Relative cursors stay correct while new
records are inserted on the server; page numbers do not, but they are the only
option when results are sorted by something other than the id.

Text encoding (the value of the ``page`` query parameter):
    Page(3)     -> "3"
    Before(42)  -> "b42"
    After(17)   -> "a17"
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .exceptions import UsageError


class CursorKind(str, Enum):
    """Kind of resume position."""

    PAGE = "page"
    BEFORE = "before"
    AFTER = "after"


_PREFIXES = {
    CursorKind.PAGE: "",
    CursorKind.BEFORE: "b",
    CursorKind.AFTER: "a",
}


@dataclass(frozen=True)
class Cursor:
    """Where to begin returning results in a paginated request."""

    kind: CursorKind
    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise UsageError(f"cursor value must be an integer, got {self.value!r}")
        if self.kind == CursorKind.PAGE and self.value < 1:
            raise UsageError("page cursor must be at least 1")
        if self.value < 0:
            raise UsageError("cursor id must not be negative")

    @classmethod
    def page(cls, number: int) -> Cursor:
        """Begin at the given page. The actual offset depends on the page size."""
        return cls(CursorKind.PAGE, number)

    @classmethod
    def before(cls, record_id: int) -> Cursor:
        """Return records whose id is lower than ``record_id``."""
        return cls(CursorKind.BEFORE, record_id)

    @classmethod
    def after(cls, record_id: int) -> Cursor:
        """Return records whose id is greater than ``record_id``."""
        return cls(CursorKind.AFTER, record_id)

    @classmethod
    def parse(cls, text: str) -> Cursor:
        """Parse the canonical text encoding.

        Raises:
            UsageError: If the text is not a valid cursor
        """
        if text[:1] == "a":
            kind, digits = CursorKind.AFTER, text[1:]
        elif text[:1] == "b":
            kind, digits = CursorKind.BEFORE, text[1:]
        else:
            kind, digits = CursorKind.PAGE, text

        if not digits.isascii() or not digits.isdigit():
            raise UsageError(f"invalid cursor: {text!r}")
        return cls(kind, int(digits))

    @property
    def is_page(self) -> bool:
        return self.kind == CursorKind.PAGE

    @property
    def is_relative(self) -> bool:
        """Whether this cursor is relative to a record id."""
        return self.kind != CursorKind.PAGE

    def __str__(self) -> str:
        return f"{_PREFIXES[self.kind]}{self.value}"

    def __repr__(self) -> str:
        return f"Cursor.{self.kind.value}({self.value})"
