"""
Portfolio API Backend: Blog Service Unit Tests
==============================================

What:  Tests for excerpt derivation and the blog create/update rules.
How:   Pure-function tests for the excerpt helpers; mocked collections for
       the service.

What we test:
    ✅ Tags are stripped, text trimmed, cut at 150 chars, "..." always appended
    ✅ Create derives an excerpt only when none is given
    ✅ Update re-derives the excerpt from new content
    ✅ Update without content re-derives the excerpt from the stored content
"""

import pytest
from bson import ObjectId

from portfolio_api.database import BLOG_COLLECTION
from portfolio_api.exceptions import ValidationError
from portfolio_api.models.blog import BlogPost
from portfolio_api.schemas.blog import BlogPostUpdate
from portfolio_api.services.blog_service import (
    EXCERPT_LENGTH,
    BlogService,
    derive_excerpt,
    strip_markup,
)


class TestExcerptDerivation:
    """Tests for strip_markup and derive_excerpt."""

    def test_tags_are_stripped(self):
        assert derive_excerpt("<p>Hello <b>world</b></p>") == "Hello world..."

    def test_whitespace_is_trimmed(self):
        assert strip_markup("  <div>\n  text  </div> ") == "text"

    def test_long_content_is_cut_at_150_characters(self):
        excerpt = derive_excerpt("<p>" + "a" * 400 + "</p>")
        assert excerpt == "a" * EXCERPT_LENGTH + "..."

    def test_ellipsis_added_even_when_short(self):
        assert derive_excerpt("Short") == "Short..."

    def test_attributes_inside_tags_are_removed(self):
        assert strip_markup('<a href="https://example.com">link</a>') == "link"


class TestBlogCreate:
    """Tests for create_post excerpt handling."""

    @pytest.fixture(autouse=True)
    def setup(self, mock_database, mock_collections):
        self.service = BlogService(mock_database)
        self.collection = mock_collections[BLOG_COLLECTION]

    @pytest.mark.asyncio
    async def test_excerpt_derived_when_missing(self):
        post = BlogPost(title="First", content="<p>Hello <b>world</b></p>")

        created = await self.service.create_post(post)

        inserted = self.collection.insert_one.await_args.args[0]
        assert inserted["excerpt"] == "Hello world..."
        assert created.excerpt == "Hello world..."

    @pytest.mark.asyncio
    async def test_empty_excerpt_is_replaced(self):
        post = BlogPost(title="First", content="Body text", excerpt="")

        await self.service.create_post(post)

        assert self.collection.insert_one.await_args.args[0]["excerpt"] == "Body text..."

    @pytest.mark.asyncio
    async def test_explicit_excerpt_is_kept(self):
        post = BlogPost(title="First", content="<p>Long body</p>", excerpt="Hand written")

        await self.service.create_post(post)

        assert self.collection.insert_one.await_args.args[0]["excerpt"] == "Hand written"


class TestBlogUpdate:
    """Tests for update_post field selection."""

    @pytest.fixture(autouse=True)
    def setup(self, mock_database, mock_collections):
        self.service = BlogService(mock_database)
        self.collection = mock_collections[BLOG_COLLECTION]
        self.post_id = ObjectId()

    def set_fields(self):
        return self.collection.find_one_and_update.await_args.args[1]["$set"]

    @pytest.mark.asyncio
    async def test_new_content_derives_new_excerpt(self):
        await self.service.update_post(str(self.post_id), BlogPostUpdate(content="<i>Fresh</i> words"))

        assert self.set_fields() == {"content": "<i>Fresh</i> words", "excerpt": "Fresh words..."}

    @pytest.mark.asyncio
    async def test_explicit_excerpt_wins_over_content(self):
        await self.service.update_post(
            str(self.post_id), BlogPostUpdate(content="<p>Body</p>", excerpt="Custom")
        )

        assert self.set_fields() == {"content": "<p>Body</p>", "excerpt": "Custom"}

    @pytest.mark.asyncio
    async def test_title_only_update_rederives_from_stored_content(self):
        self.collection.find_one.return_value = {"_id": self.post_id, "content": "<p>Stored body</p>"}

        await self.service.update_post(str(self.post_id), BlogPostUpdate(title="Renamed"))

        self.collection.find_one.assert_awaited_once_with({"_id": self.post_id}, {"content": 1})
        assert self.set_fields() == {"title": "Renamed", "excerpt": "Stored body..."}

    @pytest.mark.asyncio
    async def test_empty_excerpt_is_treated_as_absent(self):
        self.collection.find_one.return_value = {"_id": self.post_id, "content": "C"}

        await self.service.update_post(str(self.post_id), BlogPostUpdate(excerpt=""))

        assert self.set_fields() == {"excerpt": "C..."}

    @pytest.mark.asyncio
    async def test_update_of_missing_post_returns_none(self):
        result = await self.service.update_post(str(self.post_id), BlogPostUpdate(title="Renamed"))

        assert result is None
        self.collection.find_one_and_update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_malformed_id_raises_validation_error(self):
        with pytest.raises(ValidationError):
            await self.service.update_post("bad-id", BlogPostUpdate(title="Renamed"))
