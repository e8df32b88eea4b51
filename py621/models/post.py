"""Post data model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..core.enums import Rating
from .record import Record


class _Part(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class File(_Part):
    """The original file of a post. ``url`` is None for deleted or hidden posts."""

    width: int
    height: int
    ext: str
    size: int
    md5: str
    url: str | None = None


class Preview(_Part):
    """Thumbnail."""

    width: int
    height: int
    url: str | None = None


class Sample(_Part):
    """Scaled-down version of the file."""

    has: bool = False
    width: int | None = None
    height: int | None = None
    url: str | None = None


class Score(_Part):
    up: int = 0
    down: int = 0
    total: int = 0


class PostTags(_Part):
    """Tags of a post, grouped by category."""

    general: list[str] = Field(default_factory=list)
    artist: list[str] = Field(default_factory=list)
    contributor: list[str] = Field(default_factory=list)
    copyright: list[str] = Field(default_factory=list)
    character: list[str] = Field(default_factory=list)
    species: list[str] = Field(default_factory=list)
    invalid: list[str] = Field(default_factory=list)
    meta: list[str] = Field(default_factory=list)
    lore: list[str] = Field(default_factory=list)

    def all(self) -> list[str]:
        """Every tag, in category order."""
        return [
            *self.general,
            *self.artist,
            *self.contributor,
            *self.copyright,
            *self.character,
            *self.species,
            *self.invalid,
            *self.meta,
            *self.lore,
        ]


class PostFlags(_Part):
    pending: bool = False
    flagged: bool = False
    note_locked: bool = False
    status_locked: bool = False
    rating_locked: bool = False
    deleted: bool = False


class Relationships(_Part):
    parent_id: int | None = None
    has_children: bool = False
    has_active_children: bool = False
    children: list[int] = Field(default_factory=list)


class Post(Record):
    """A post (an uploaded image, animation or video)."""

    created_at: datetime
    updated_at: datetime | None = None
    file: File
    preview: Preview
    sample: Sample = Field(default_factory=Sample)
    score: Score = Field(default_factory=Score)
    tags: PostTags = Field(default_factory=PostTags)
    locked_tags: list[str] = Field(default_factory=list)
    change_seq: int | None = None
    flags: PostFlags = Field(default_factory=PostFlags)
    rating: Rating
    fav_count: int = 0
    sources: list[str] = Field(default_factory=list)
    pools: list[int] = Field(default_factory=list)
    relationships: Relationships = Field(default_factory=Relationships)
    approver_id: int | None = None
    uploader_id: int | None = None
    description: str = ""
    comment_count: int = 0
    is_favorited: bool = False
    has_notes: bool = False
    duration: float | None = None

    @property
    def is_deleted(self) -> bool:
        return self.flags.deleted
