"""Storage models for posts, tags and the tag/post pivot."""

from django.conf import settings
from django.db import models

from src.apps.core.models import SluggedModel, TimestampedModel


class Tag(models.Model):
    """A tag; names are unique and compared case-sensitively."""

    name = models.CharField(
        max_length=100, unique=True, help_text="Tag name, matched exactly."
    )

    class Meta:
        verbose_name = "Tag"
        verbose_name_plural = "Tags"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Post(TimestampedModel, SluggedModel):
    """
    A blog post.

    Drafts (``published=False``) are stored alongside published posts and
    filtered out by every public query.
    """

    title = models.CharField(max_length=255, help_text="The title of the post.")
    contents = models.TextField(help_text="The body of the post.")
    published = models.BooleanField(
        default=False, db_index=True, help_text="Whether the post is publicly visible."
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="posts",
        help_text="The user who authored the post.",
    )
    tags = models.ManyToManyField(
        Tag, through="PostTag", related_name="posts", blank=True
    )

    class Meta:
        verbose_name = "Post"
        verbose_name_plural = "Posts"
        ordering = ["-created", "-id"]

    def __str__(self) -> str:
        return self.title

    @property
    def slug_source(self) -> str:
        return self.title


class PostTag(models.Model):
    """Pivot row linking one tag to one post."""

    post = models.ForeignKey(Post, on_delete=models.CASCADE)
    tag = models.ForeignKey(Tag, on_delete=models.CASCADE)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["tag", "post"], name="unique_post_tag"),
        ]

    def __str__(self) -> str:
        return f"{self.tag_id} -> {self.post_id}"
