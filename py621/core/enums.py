"""Core enumerations shared by queries and record models.

Design Decisions:
    - String enums: values are the exact strings the API sends and accepts
    - Integer enum for tag categories: the API encodes them as numbers
"""

from enum import Enum, IntEnum


class Rating(str, Enum):
    """Post rating."""

    SAFE = "s"
    QUESTIONABLE = "q"
    EXPLICIT = "e"

    @property
    def label(self) -> str:
        return {"s": "safe", "q": "questionable", "e": "explicit"}[self.value]


class TagCategory(IntEnum):
    """Kind of property a tag describes."""

    GENERAL = 0
    ARTIST = 1
    CONTRIBUTOR = 2
    COPYRIGHT = 3
    CHARACTER = 4
    SPECIES = 5
    INVALID = 6
    META = 7
    LORE = 8


class TagOrder(str, Enum):
    """How to sort the results of a tag query."""

    ID_ASC = "id_asc"
    ID_DESC = "id_desc"
    NAME = "name"
    DATE = "date"
    COUNT = "count"
    SIMILARITY = "similarity"


class PoolCategory(str, Enum):
    """Pool category."""

    SERIES = "series"
    COLLECTION = "collection"


class PoolOrder(str, Enum):
    """How to sort the results of a pool search."""

    NAME = "name"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    POST_COUNT = "post_count"
