"""
Mapping between ORM models and typed records.

Every conversion between storage rows and records goes through here so the
rest of the core never touches model instances.
"""

from typing import TYPE_CHECKING

from .models import Post, Tag
from .records import PostRecord, TagRecord, UserRecord

if TYPE_CHECKING:
    from django.contrib.auth.models import User


def post_to_record(post: Post) -> PostRecord:
    return PostRecord(
        id=post.pk,
        title=post.title,
        contents=post.contents,
        author_id=post.author_id,
        slug=post.slug,
        published=post.published,
        created=post.created,
        last_edited=post.last_edited,
    )


def apply_post_record(record: PostRecord, post: Post) -> Post:
    """Copy the writable fields of ``record`` onto ``post``."""
    post.title = record.title
    post.contents = record.contents
    post.author_id = record.author_id
    post.slug = record.slug
    post.published = record.published
    post.created = record.created
    return post


def tag_to_record(tag: Tag) -> TagRecord:
    return TagRecord(id=tag.pk, name=tag.name)


def user_to_record(user: "User") -> UserRecord:
    return UserRecord(
        id=user.pk,
        username=user.username,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
    )


def apply_user_record(record: UserRecord, user: "User") -> "User":
    """Copy the writable fields of ``record`` onto ``user``."""
    user.username = record.username
    user.first_name = record.first_name
    user.last_name = record.last_name
    user.email = record.email
    return user
