"""e621 REST endpoint definitions."""

from . import favorites, pools, posts, tags

__all__ = ["favorites", "pools", "posts", "tags"]
