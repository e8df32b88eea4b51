"""Pool data model."""

from datetime import datetime

from pydantic import Field

from ..core.enums import PoolCategory
from .record import Record


class Pool(Record):
    """An ordered group of posts."""

    name: str
    created_at: datetime
    updated_at: datetime
    creator_id: int
    creator_name: str = ""
    description: str = ""
    is_active: bool = True
    is_deleted: bool = False
    category: PoolCategory
    post_ids: list[int] = Field(default_factory=list)
    post_count: int = 0
