"""Record models for API resources.

Architecture:
    All models are Pydantic v2 and immutable (frozen=True). Unknown fields
    sent by the server are ignored so new API fields never break decoding.
"""

from .pool import Pool
from .post import File, Post, PostFlags, PostTags, Preview, Relationships, Sample, Score
from .record import Record
from .tag import Tag

__all__ = [
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
]
