"""
Django ORM adapters for the repository contracts.

Queries use Django's async ORM interface so the orchestrator can await
several of them at once. Database errors are logged and re-raised as
DependencyFailure.
"""

import logging
from functools import wraps
from typing import Any, Callable, Optional

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.db.models import Count, Q, QuerySet

from src.apps.core.exceptions import DependencyFailure, NotFound

from ..mappers import (
    apply_post_record,
    apply_user_record,
    post_to_record,
    tag_to_record,
    user_to_record,
)
from ..models import Post, PostTag, Tag
from ..records import PostRecord, TagRecord, UserRecord
from .base import require_id

logger = logging.getLogger(__name__)

User = get_user_model()

PUBLISHED_POSTS = Q(posts__published=True)


def translate_storage_errors(func: Callable):
    """Decorator turning ``DatabaseError`` into ``DependencyFailure``."""

    @wraps(func)
    async def wrapper(self, *args: Any, **kwargs: Any):
        try:
            return await func(self, *args, **kwargs)
        except DatabaseError as e:
            logger.error(
                f"Storage call {type(self).__name__}.{func.__name__} failed: {e}",
                extra={"repository": type(self).__name__, "operation": func.__name__},
            )
            raise DependencyFailure(f"{func.__name__} failed: {e}") from e

    return wrapper


async def _page(queryset: QuerySet, count: Optional[int], offset: int) -> list[PostRecord]:
    if count is not None:
        queryset = queryset[offset : offset + count]
    elif offset:
        queryset = queryset[offset:]
    return [post_to_record(post) async for post in queryset]


class DjangoPostRepository:
    """PostRepository backed by the ``blog.Post`` table."""

    @staticmethod
    def _by_recency(include_drafts: bool) -> QuerySet:
        queryset = Post.objects.all()
        if not include_drafts:
            queryset = queryset.filter(published=True)
        return queryset.order_by("-created", "-id")

    @staticmethod
    def _matching(term: str) -> QuerySet:
        return Post.objects.filter(published=True).filter(
            Q(title__icontains=term) | Q(contents__icontains=term)
        )

    @translate_storage_errors
    async def list_by_recency(
        self, include_drafts: bool, count: Optional[int] = None, offset: int = 0
    ) -> list[PostRecord]:
        return await _page(self._by_recency(include_drafts), count, offset)

    @translate_storage_errors
    async def count_by_recency(self, include_drafts: bool) -> int:
        return await self._by_recency(include_drafts).acount()

    @translate_storage_errors
    async def list_for_author(
        self, author: UserRecord, include_drafts: bool, count: int, offset: int
    ) -> list[PostRecord]:
        queryset = self._by_recency(include_drafts).filter(author_id=require_id(author))
        return await _page(queryset, count, offset)

    @translate_storage_errors
    async def count_for_author(self, author: UserRecord, include_drafts: bool = False) -> int:
        return await (
            self._by_recency(include_drafts).filter(author_id=require_id(author)).acount()
        )

    @translate_storage_errors
    async def get_by_slug(self, slug: str) -> Optional[PostRecord]:
        post = await Post.objects.filter(slug=slug).afirst()
        return post_to_record(post) if post else None

    @translate_storage_errors
    async def get_by_id(self, post_id: int) -> Optional[PostRecord]:
        post = await Post.objects.filter(pk=post_id).afirst()
        return post_to_record(post) if post else None

    @translate_storage_errors
    async def list_published_for_tag(
        self, tag: TagRecord, count: int, offset: int
    ) -> list[PostRecord]:
        queryset = self._by_recency(False).filter(tags__id=require_id(tag))
        return await _page(queryset, count, offset)

    @translate_storage_errors
    async def count_published_for_tag(self, tag: TagRecord) -> int:
        return await self._by_recency(False).filter(tags__id=require_id(tag)).acount()

    @translate_storage_errors
    async def search_published(self, term: str, count: int, offset: int) -> list[PostRecord]:
        return await _page(self._matching(term).order_by("-created", "-id"), count, offset)

    @translate_storage_errors
    async def count_published_for_search_term(self, term: str) -> int:
        return await self._matching(term).acount()

    @translate_storage_errors
    async def save(self, post: PostRecord) -> PostRecord:
        if post.id is None:
            model = Post()
        else:
            model = await Post.objects.filter(pk=post.id).afirst()
            if model is None:
                raise NotFound(f"Post {post.id} does not exist")
        apply_post_record(post, model)
        await model.asave()
        logger.info(
            "Post saved.",
            extra={"post_id": model.pk, "author_id": model.author_id},
        )
        return post_to_record(model)

    @translate_storage_errors
    async def delete(self, post: PostRecord) -> None:
        await Post.objects.filter(pk=require_id(post)).adelete()
        logger.info("Post deleted.", extra={"post_id": post.id})


class DjangoTagRepository:
    """TagRepository backed by ``blog.Tag`` and the ``blog.PostTag`` pivot."""

    @translate_storage_errors
    async def list_all(self) -> list[TagRecord]:
        return [tag_to_record(tag) async for tag in Tag.objects.order_by("name")]

    @translate_storage_errors
    async def list_all_with_post_count(self) -> list[tuple[TagRecord, int]]:
        queryset = Tag.objects.annotate(
            post_count=Count("posts", filter=PUBLISHED_POSTS)
        ).order_by("name")
        return [(tag_to_record(tag), tag.post_count) async for tag in queryset]

    @translate_storage_errors
    async def list_for_post(self, post: PostRecord) -> list[TagRecord]:
        queryset = Tag.objects.filter(posts__id=require_id(post)).order_by("name")
        return [tag_to_record(tag) async for tag in queryset]

    @translate_storage_errors
    async def list_for_all_posts(self) -> dict[int, list[TagRecord]]:
        pivots = PostTag.objects.select_related("tag").order_by("post_id", "tag__name")
        tags_for_posts: dict[int, list[TagRecord]] = {}
        async for pivot in pivots:
            tags_for_posts.setdefault(pivot.post_id, []).append(tag_to_record(pivot.tag))
        return tags_for_posts

    @translate_storage_errors
    async def get_by_name(self, name: str) -> Optional[TagRecord]:
        tag = await Tag.objects.filter(name=name).afirst()
        return tag_to_record(tag) if tag else None

    @translate_storage_errors
    async def save(self, tag: TagRecord) -> TagRecord:
        model = Tag(pk=tag.id, name=tag.name)
        await model.asave()
        logger.info("Tag saved.", extra={"tag_id": model.pk, "tag_name": model.name})
        return tag_to_record(model)

    @translate_storage_errors
    async def delete_all_for_post(self, post: PostRecord) -> None:
        await PostTag.objects.filter(post_id=require_id(post)).adelete()

    @translate_storage_errors
    async def detach(self, tag: TagRecord, post: PostRecord) -> None:
        await PostTag.objects.filter(
            tag_id=require_id(tag), post_id=require_id(post)
        ).adelete()

    @translate_storage_errors
    async def attach(self, tag: TagRecord, post: PostRecord) -> None:
        # get_or_create skips the insert when the pivot exists; the (tag, post)
        # unique constraint still rejects a concurrent duplicate.
        await PostTag.objects.aget_or_create(tag_id=require_id(tag), post_id=require_id(post))

    @translate_storage_errors
    async def delete_orphaned(self) -> int:
        deleted, _ = await Tag.objects.filter(posttag__isnull=True).adelete()
        return deleted


class DjangoUserRepository:
    """UserRepository backed by the configured auth user model."""

    @translate_storage_errors
    async def list_all(self) -> list[UserRecord]:
        return [user_to_record(user) async for user in User.objects.order_by("username")]

    @translate_storage_errors
    async def list_all_with_post_count(self) -> list[tuple[UserRecord, int]]:
        queryset = User.objects.annotate(
            post_count=Count("posts", filter=PUBLISHED_POSTS)
        ).order_by("username")
        return [(user_to_record(user), user.post_count) async for user in queryset]

    @translate_storage_errors
    async def get_by_id(self, user_id: int) -> Optional[UserRecord]:
        user = await User.objects.filter(pk=user_id).afirst()
        return user_to_record(user) if user else None

    @translate_storage_errors
    async def get_by_username(self, username: str) -> Optional[UserRecord]:
        user = await User.objects.filter(username=username).afirst()
        return user_to_record(user) if user else None

    @translate_storage_errors
    async def save(self, user: UserRecord) -> UserRecord:
        if user.id is None:
            model = User()
            model.set_unusable_password()
        else:
            model = await User.objects.filter(pk=user.id).afirst()
            if model is None:
                raise NotFound(f"User {user.id} does not exist")
        apply_user_record(user, model)
        await model.asave()
        return user_to_record(model)

    @translate_storage_errors
    async def delete(self, user: UserRecord) -> None:
        await User.objects.filter(pk=require_id(user)).adelete()
        logger.info("User deleted.", extra={"user_id": user.id})

    @translate_storage_errors
    async def count(self) -> int:
        return await User.objects.acount()
