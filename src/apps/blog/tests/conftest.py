"""
Fixtures for the blog tests that run against the in-memory repositories.
"""

from datetime import timedelta
from typing import Any, Callable

import pytest
from asgiref.sync import async_to_sync
from django.utils import timezone
from faker import Faker

from src.apps.blog.records import PostRecord, TagRecord, UserRecord

fake = Faker()


@pytest.fixture
def author_record(memory_users: Any) -> UserRecord:
    """A stored author in the in-memory store."""
    return async_to_sync(memory_users.save)(
        UserRecord(username="ada", first_name="Ada", last_name="Lovelace")
    )


@pytest.fixture
def add_post(memory_posts: Any, author_record: UserRecord) -> Callable[..., PostRecord]:
    """
    Factory storing posts in the in-memory store, newest first.

    Like ``make_post``, every call is one minute older than the previous one.
    """
    base_time = timezone.now()
    created_count = 0

    def _add_post(
        published: bool = True, author: UserRecord = None, **fields: Any
    ) -> PostRecord:
        nonlocal created_count
        created_count += 1
        record = PostRecord(
            title=fields.pop("title", fake.sentence(nb_words=4)),
            contents=fields.pop("contents", fake.paragraph()),
            author_id=(author or author_record).id,
            published=published,
            created=fields.pop("created", base_time - timedelta(minutes=created_count)),
            **fields,
        )
        return async_to_sync(memory_posts.save)(record)

    return _add_post


@pytest.fixture
def add_tag_to(memory_tags: Any) -> Callable[[str, PostRecord], TagRecord]:
    """Attach a tag by name to a stored post, creating the tag when needed."""

    def _add_tag_to(name: str, post: PostRecord) -> TagRecord:
        tag = async_to_sync(memory_tags.get_by_name)(name)
        if tag is None:
            tag = async_to_sync(memory_tags.save)(TagRecord(name=name))
        async_to_sync(memory_tags.attach)(tag, post)
        return tag

    return _add_tag_to
