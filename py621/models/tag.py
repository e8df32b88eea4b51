"""Tag data model."""

from datetime import datetime

from ..core.enums import TagCategory
from .record import Record


class Tag(Record):
    """A keyword describing a post."""

    name: str
    post_count: int = 0
    # Space-separated "name weight" pairs, as sent by the API
    related_tags: str = ""
    related_tags_updated_at: datetime | None = None
    category: TagCategory
    is_locked: bool = False
    created_at: datetime
    updated_at: datetime
