"""Base models shared by the content apps."""

from django.db import models
from django.utils import timezone
from django.utils.text import slugify

SLUG_MAX_LENGTH = 100


class TimestampedModel(models.Model):
    """Abstract base model with publish/edit timestamps.

    ``created`` is settable so content can be back-dated or scheduled;
    ``last_edited`` is maintained automatically on every save.
    """

    created = models.DateTimeField(
        default=timezone.now,
        db_index=True,
        help_text="Timestamp when the record was created or published",
    )
    last_edited = models.DateTimeField(
        auto_now=True, help_text="Timestamp when the record was last edited"
    )

    class Meta:
        abstract = True
        ordering = ["-created"]


class SluggedModel(models.Model):
    """Abstract model with automatic slug generation.

    Subclasses expose a ``slug_source`` property; when a record is saved
    without a slug one is derived from it and suffixed until unique.
    """

    slug = models.SlugField(
        max_length=SLUG_MAX_LENGTH, unique=True, help_text="URL-friendly identifier"
    )

    class Meta:
        abstract = True

    @property
    def slug_source(self) -> str:
        raise NotImplementedError

    def save(self, *args, **kwargs):
        """Generate a unique slug if none was provided."""
        if not self.slug:
            self.slug = self._unique_slug(slugify(self.slug_source) or "untitled")
        super().save(*args, **kwargs)

    def _unique_slug(self, base_slug: str) -> str:
        # leave room for a "-NNN" suffix
        base_slug = base_slug[: SLUG_MAX_LENGTH - 10].rstrip("-")
        slug = base_slug
        counter = 1
        others = self.__class__.objects.exclude(pk=self.pk)
        while others.filter(slug=slug).exists():
            slug = f"{base_slug}-{counter}"
            counter += 1
        return slug
