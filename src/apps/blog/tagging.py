"""
Tag lifecycle: find-or-create by name and pivot attach/detach.

Tag names are matched exactly; no case folding or whitespace trimming is
applied. Removing a pivot never deletes the tag row. Orphaned tags are only
removed by an explicit call to ``delete_orphaned_tags``, which the
scheduler and the ``delete_orphan_tags`` management command trigger.
"""

import logging
from typing import Iterable

from .records import PostRecord, TagRecord
from .repositories.base import TagRepository, require_id

logger = logging.getLogger(__name__)


async def add_tag(name: str, post: PostRecord, *, tags: TagRepository) -> TagRecord:
    """
    Tag ``post`` with ``name``, creating the tag if no tag has that name yet.

    The pivot is created whether the tag was reused or new; the storage
    adapter decides what a repeated pivot means.

    Args:
        name: Exact tag name.
        post: A persisted post.
        tags: Tag repository.

    Returns:
        The (possibly newly created) tag.

    Raises:
        ConsistencyViolation: If ``post`` has not been saved.
    """
    require_id(post)
    tag = await tags.get_by_name(name)
    if tag is None:
        tag = await tags.save(TagRecord(name=name))
        logger.info("Tag created.", extra={"tag_id": tag.id, "tag_name": name})
    await tags.attach(tag, post)
    logger.info("Tag attached.", extra={"tag_id": tag.id, "post_id": post.id})
    return tag


async def remove_tag(tag: TagRecord, post: PostRecord, *, tags: TagRepository) -> None:
    """Detach ``tag`` from ``post``; the tag row itself is kept."""
    await tags.detach(tag, post)
    logger.info("Tag detached.", extra={"tag_id": tag.id, "post_id": post.id})


async def replace_tags(
    names: Iterable[str], post: PostRecord, *, tags: TagRepository
) -> list[TagRecord]:
    """
    Make ``names`` the complete tag set of ``post``.

    Existing pivots are dropped first, then each distinct name is added in
    the given order. Tags left without posts are not deleted here.
    """
    require_id(post)
    await tags.delete_all_for_post(post)
    result = []
    for name in dict.fromkeys(names):
        result.append(await add_tag(name, post, tags=tags))
    return result


async def delete_orphaned_tags(*, tags: TagRepository) -> int:
    """Delete every tag that no post uses; returns the number deleted."""
    deleted = await tags.delete_orphaned()
    logger.info(f"Deleted {deleted} orphaned tag(s).", extra={"deleted": deleted})
    return deleted
