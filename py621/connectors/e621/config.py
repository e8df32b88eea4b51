"""Shared e621 connector constants.

This module centralizes URLs, limits and timing used by the REST endpoints
and the client so the endpoint definitions can stay small and focused.
"""

from __future__ import annotations

BASE_URLS = {
    "e621": "https://e621.net",
    "e926": "https://e926.net",
}

# The API allows at most 2 requests per second (hitting it returns a 503), so
# the lowest safe spacing is 500 ms. The extra 100 ms absorbs clock jitter.
REQUEST_COOLDOWN = 0.6

DEFAULT_TIMEOUT = 30.0

# Largest `limit` accepted by the listing endpoints.
MAX_PAGE_SIZE = {
    "posts": 320,
    "pools": 320,
    "tags": 1000,
}

DEFAULT_PAGE_SIZE = 320

# Maximum number of ids packed into a single `id:` lookup.
ID_BATCH_SIZE = 100

POSTS_PATH = "/posts.json"
POOLS_PATH = "/pools.json"
TAGS_PATH = "/tags.json"
FAVORITES_PATH = "/favorites.json"
