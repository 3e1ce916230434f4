"""Django management command to delete tags that no post uses."""

from typing import Any

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandParser

from src.apps.blog.models import Tag
from src.apps.blog.repositories import DjangoTagRepository
from src.apps.blog.tagging import delete_orphaned_tags


class Command(BaseCommand):
    """
    Delete orphaned tags on demand.

    The same sweep runs on a schedule through Celery beat; this command is
    for one-off cleanups.

    Usage:
        python manage.py delete_orphan_tags [--dry-run]
    """

    help = "Delete tags that are not attached to any post"

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="List the orphaned tags without deleting them",
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the management command."""
        if options["dry_run"]:
            names = list(
                Tag.objects.filter(posttag__isnull=True).values_list("name", flat=True)
            )
            for name in names:
                self.stdout.write(f"  {name}")
            self.stdout.write(
                self.style.WARNING(f"{len(names)} orphaned tag(s) would be deleted")
            )
            return

        deleted = async_to_sync(delete_orphaned_tags)(tags=DjangoTagRepository())
        self.stdout.write(self.style.SUCCESS(f"Deleted {deleted} orphaned tag(s)"))
