"""
Tests for the orphan tag sweep: the Celery task and the management command.
"""

from datetime import timedelta
from io import StringIO

from django.conf import settings
from django.core.management import call_command

from src.apps.blog.models import Tag
from src.apps.blog.tasks import delete_orphan_tags


def _tags(make_post):
    make_post().tags.add(Tag.objects.create(name="used"))
    Tag.objects.create(name="orphan-a")
    Tag.objects.create(name="orphan-b")


class TestDeleteOrphanTagsTask:
    def test_deletes_unused_tags(self, make_post):
        _tags(make_post)

        result = delete_orphan_tags.apply()

        assert result.get() == 2
        assert list(Tag.objects.values_list("name", flat=True)) == ["used"]

    def test_is_scheduled(self):
        entry = settings.CELERY_BEAT_SCHEDULE["delete-orphan-tags"]

        assert entry["task"] == delete_orphan_tags.name
        assert entry["schedule"] == timedelta(hours=settings.BLOG_ORPHAN_TAG_SWEEP_HOURS)


class TestDeleteOrphanTagsCommand:
    def test_dry_run_only_lists(self, make_post):
        _tags(make_post)
        out = StringIO()

        call_command("delete_orphan_tags", "--dry-run", stdout=out)

        output = out.getvalue()
        assert "orphan-a" in output
        assert "orphan-b" in output
        assert "2 orphaned tag(s) would be deleted" in output
        assert Tag.objects.count() == 3

    def test_deletes(self, make_post):
        _tags(make_post)
        out = StringIO()

        call_command("delete_orphan_tags", stdout=out)

        assert "Deleted 2 orphaned tag(s)" in out.getvalue()
        assert Tag.objects.count() == 1
