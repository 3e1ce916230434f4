"""
Tests for route parameter resolution.
"""

import pytest
from asgiref.sync import async_to_sync

from src.apps.blog import resolvers
from src.apps.core.exceptions import InvalidIdentifier, NotFound


class TestParseIdentifier:
    @pytest.mark.parametrize("raw", ["abc", "", "0", "-1", "1.5", " 7", "١٢"])
    def test_rejects_non_positive_or_non_numeric(self, raw):
        with pytest.raises(InvalidIdentifier):
            resolvers.parse_identifier(raw, "Post")

    def test_message_names_the_entity_kind(self):
        with pytest.raises(InvalidIdentifier, match="Unable to convert 'abc' to a Post ID"):
            resolvers.parse_identifier("abc", "Post")

    def test_parses_positive_integers(self):
        assert resolvers.parse_identifier("42", "User") == 42


class TestResolvePost:
    def test_found(self, memory_posts, add_post):
        post = add_post()

        assert async_to_sync(resolvers.resolve_post)(str(post.id), posts=memory_posts) == post

    def test_invalid_id_is_reported_before_any_lookup(self, memory_store, memory_posts):
        with pytest.raises(InvalidIdentifier):
            async_to_sync(resolvers.resolve_post)("abc", posts=memory_posts)

        assert memory_store.query_count == 0

    def test_missing(self, memory_posts):
        with pytest.raises(NotFound):
            async_to_sync(resolvers.resolve_post)("9999", posts=memory_posts)


class TestResolvePostSlug:
    def test_published(self, memory_posts, add_post):
        post = add_post(title="Visible")

        assert async_to_sync(resolvers.resolve_post_slug)("visible", posts=memory_posts).id == post.id

    def test_drafts_are_not_found(self, memory_posts, add_post):
        add_post(title="Secret", published=False)

        with pytest.raises(NotFound):
            async_to_sync(resolvers.resolve_post_slug)("secret", posts=memory_posts)


class TestResolveUsers:
    def test_by_id(self, memory_users, author_record):
        assert async_to_sync(resolvers.resolve_user)(str(author_record.id), users=memory_users) == author_record

    def test_by_id_missing(self, memory_users):
        with pytest.raises(NotFound):
            async_to_sync(resolvers.resolve_user)("9999", users=memory_users)

    def test_by_username(self, memory_users, author_record):
        assert async_to_sync(resolvers.resolve_username)("ada", users=memory_users).id == author_record.id

    def test_by_username_missing(self, memory_users):
        with pytest.raises(NotFound):
            async_to_sync(resolvers.resolve_username)("nobody", users=memory_users)


class TestResolveTag:
    def test_exact_name(self, memory_tags, add_post, add_tag_to):
        tag = add_tag_to("machine learning", add_post())

        assert async_to_sync(resolvers.resolve_tag)("machine learning", tags=memory_tags) == tag

    def test_missing(self, memory_tags):
        with pytest.raises(NotFound):
            async_to_sync(resolvers.resolve_tag)("nope", tags=memory_tags)
