"""
Route parameter resolution.

Turns raw path segments into records before a view handler runs. A failure
here ends the request; the orchestrator is never called.
"""

from src.apps.core.exceptions import InvalidIdentifier, NotFound

from .records import PostRecord, TagRecord, UserRecord
from .repositories.base import PostRepository, TagRepository, UserRepository


def parse_identifier(raw: str, kind: str) -> int:
    """Parse a positive integer id, rejecting anything else."""
    if not raw.isascii() or not raw.isdigit():
        raise InvalidIdentifier(f"Unable to convert {raw!r} to a {kind} ID")
    identifier = int(raw)
    if identifier < 1:
        raise InvalidIdentifier(f"{kind} ID must be positive, got {raw!r}")
    return identifier


async def resolve_post(raw: str, *, posts: PostRepository) -> PostRecord:
    post = await posts.get_by_id(parse_identifier(raw, "Post"))
    if post is None:
        raise NotFound(f"No post with id {raw}")
    return post


async def resolve_user(raw: str, *, users: UserRepository) -> UserRecord:
    user = await users.get_by_id(parse_identifier(raw, "User"))
    if user is None:
        raise NotFound(f"No user with id {raw}")
    return user


async def resolve_tag(raw: str, *, tags: TagRepository) -> TagRecord:
    """Look a tag up by its name, used verbatim as the key."""
    tag = await tags.get_by_name(raw)
    if tag is None:
        raise NotFound(f"No tag named {raw!r}")
    return tag


async def resolve_post_slug(raw: str, *, posts: PostRepository) -> PostRecord:
    """Resolve a public post URL; drafts are reported as missing."""
    post = await posts.get_by_slug(raw)
    if post is None or not post.published:
        raise NotFound(f"No post with slug {raw!r}")
    return post


async def resolve_username(raw: str, *, users: UserRepository) -> UserRecord:
    user = await users.get_by_username(raw)
    if user is None:
        raise NotFound(f"No author named {raw!r}")
    return user
