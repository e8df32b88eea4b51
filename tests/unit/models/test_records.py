"""Unit tests for record models."""

import pytest
from pydantic import ValidationError

from py621.core import PoolCategory, Rating, TagCategory
from py621.models import Pool, Post, Tag


class TestPost:
    """Test Post decoding."""

    def test_decode(self, make_post):
        """Test a typical payload decodes into nested models."""
        post = Post.model_validate(make_post(12, rating="e"))
        assert post.id == 12
        assert post.rating == Rating.EXPLICIT
        assert post.rating.label == "explicit"
        assert post.file.ext == "png"
        assert post.preview.url is None
        assert post.score.total == 2
        assert post.tags.all() == ["fluffy", "canine"]
        assert not post.is_deleted

    def test_unknown_fields_ignored(self, make_post):
        """Test fields the model does not know about are dropped."""
        post = Post.model_validate(make_post(1, brand_new_field={"x": 1}))
        assert not hasattr(post, "brand_new_field")

    def test_frozen(self, make_post):
        """Test records are immutable."""
        post = Post.model_validate(make_post(1))
        with pytest.raises(ValidationError):
            post.fav_count = 3

    def test_deleted_flag(self, make_post):
        """Test is_deleted reads the deleted flag."""
        post = Post.model_validate(make_post(1, flags={"deleted": True}))
        assert post.is_deleted

    def test_missing_required_field(self, make_post):
        """Test a payload without a file does not validate."""
        payload = make_post(1)
        del payload["file"]
        with pytest.raises(ValidationError):
            Post.model_validate(payload)


class TestPoolAndTag:
    """Test Pool and Tag decoding."""

    def test_pool(self):
        """Test pool payload decoding."""
        pool = Pool.model_validate(
            {
                "id": 7,
                "name": "My_Comic",
                "created_at": "2020-05-01T10:00:00.000-04:00",
                "updated_at": "2021-05-01T10:00:00.000-04:00",
                "creator_id": 3,
                "creator_name": "someone",
                "description": "",
                "is_active": True,
                "category": "series",
                "post_ids": [5, 9, 2],
                "post_count": 3,
            }
        )
        assert pool.category == PoolCategory.SERIES
        assert pool.post_ids == [5, 9, 2]

    def test_tag(self):
        """Test tag payload decoding with a numeric category."""
        tag = Tag.model_validate(
            {
                "id": 1,
                "name": "wolf",
                "post_count": 100,
                "related_tags": "wolf 300 canine 250",
                "related_tags_updated_at": None,
                "category": 5,
                "is_locked": False,
                "created_at": "2020-05-01T10:00:00.000-04:00",
                "updated_at": "2020-05-01T10:00:00.000-04:00",
            }
        )
        assert tag.category == TagCategory.SPECIES
