"""Scheduled maintenance tasks for the blog."""

import logging

from asgiref.sync import async_to_sync
from celery import shared_task

from .repositories import DjangoTagRepository
from .tagging import delete_orphaned_tags

logger = logging.getLogger(__name__)


@shared_task(name="blog.delete_orphan_tags")
def delete_orphan_tags() -> int:
    """
    Delete tags that no post uses any more.

    Detaching a tag never removes the tag row, so this runs periodically
    from the beat schedule (``BLOG_ORPHAN_TAG_SWEEP_HOURS``).
    """
    deleted = async_to_sync(delete_orphaned_tags)(tags=DjangoTagRepository())
    logger.info("Orphan tag sweep finished.", extra={"deleted": deleted})
    return deleted
