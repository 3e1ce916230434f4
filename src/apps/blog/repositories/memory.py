"""
In-memory adapters for the repository contracts.

Used as test doubles and for running the orchestrator without a database.
The three repositories share one ``InMemoryStore`` so pivots and counts stay
consistent across them. Records are copied on the way in and out, mirroring
the isolation a real database gives.
"""

import itertools
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

from django.utils.text import slugify

from src.apps.core.exceptions import DependencyFailure, NotFound

from ..records import PostRecord, TagRecord, UserRecord
from .base import require_id


@dataclass
class InMemoryStore:
    """
    Shared state for the in-memory repositories.

    Attributes:
        posts: Posts keyed by id.
        tags: Tags keyed by id.
        users: Users keyed by id.
        pivots: ``(tag_id, post_id)`` associations; a set, so re-attaching is a no-op.
        query_count: Number of repository calls made so far.
    """

    posts: dict[int, PostRecord] = field(default_factory=dict)
    tags: dict[int, TagRecord] = field(default_factory=dict)
    users: dict[int, UserRecord] = field(default_factory=dict)
    pivots: set[tuple[int, int]] = field(default_factory=set)
    query_count: int = 0
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1))

    def next_id(self) -> int:
        return next(self._ids)

    def hit(self) -> None:
        self.query_count += 1

    def published_posts_of(self, post_ids: Iterable[int]) -> int:
        return sum(1 for post_id in post_ids if self.posts[post_id].published)


def _newest_first(posts: Iterable[PostRecord]) -> list[PostRecord]:
    return sorted(posts, key=lambda post: (post.created, post.id), reverse=True)


def _page(posts: list[PostRecord], count: Optional[int], offset: int) -> list[PostRecord]:
    end = None if count is None else offset + count
    return [replace(post) for post in posts[offset:end]]


class InMemoryPostRepository:
    """PostRepository over an InMemoryStore."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    def _by_recency(self, include_drafts: bool) -> list[PostRecord]:
        return _newest_first(
            post for post in self.store.posts.values() if include_drafts or post.published
        )

    def _matching(self, term: str) -> list[PostRecord]:
        needle = term.casefold()
        return [
            post
            for post in self._by_recency(False)
            if needle in post.title.casefold() or needle in post.contents.casefold()
        ]

    def _tagged(self, tag: TagRecord) -> list[PostRecord]:
        tag_id = require_id(tag)
        post_ids = {post_id for t_id, post_id in self.store.pivots if t_id == tag_id}
        return [post for post in self._by_recency(False) if post.id in post_ids]

    async def list_by_recency(
        self, include_drafts: bool, count: Optional[int] = None, offset: int = 0
    ) -> list[PostRecord]:
        self.store.hit()
        return _page(self._by_recency(include_drafts), count, offset)

    async def count_by_recency(self, include_drafts: bool) -> int:
        self.store.hit()
        return len(self._by_recency(include_drafts))

    async def list_for_author(
        self, author: UserRecord, include_drafts: bool, count: int, offset: int
    ) -> list[PostRecord]:
        self.store.hit()
        author_id = require_id(author)
        posts = [post for post in self._by_recency(include_drafts) if post.author_id == author_id]
        return _page(posts, count, offset)

    async def count_for_author(self, author: UserRecord, include_drafts: bool = False) -> int:
        self.store.hit()
        author_id = require_id(author)
        return sum(1 for post in self._by_recency(include_drafts) if post.author_id == author_id)

    async def get_by_slug(self, slug: str) -> Optional[PostRecord]:
        self.store.hit()
        for post in self.store.posts.values():
            if post.slug == slug:
                return replace(post)
        return None

    async def get_by_id(self, post_id: int) -> Optional[PostRecord]:
        self.store.hit()
        post = self.store.posts.get(post_id)
        return replace(post) if post else None

    async def list_published_for_tag(
        self, tag: TagRecord, count: int, offset: int
    ) -> list[PostRecord]:
        self.store.hit()
        return _page(self._tagged(tag), count, offset)

    async def count_published_for_tag(self, tag: TagRecord) -> int:
        self.store.hit()
        return len(self._tagged(tag))

    async def search_published(self, term: str, count: int, offset: int) -> list[PostRecord]:
        self.store.hit()
        return _page(self._matching(term), count, offset)

    async def count_published_for_search_term(self, term: str) -> int:
        self.store.hit()
        return len(self._matching(term))

    async def save(self, post: PostRecord) -> PostRecord:
        self.store.hit()
        if post.id is not None and post.id not in self.store.posts:
            raise NotFound(f"Post {post.id} does not exist")
        saved = replace(post, id=post.id or self.store.next_id())
        if not saved.slug:
            saved.slug = self._unique_slug(slugify(saved.title) or "untitled", saved.id)
        self.store.posts[saved.id] = saved
        return replace(saved)

    async def delete(self, post: PostRecord) -> None:
        self.store.hit()
        post_id = require_id(post)
        self.store.posts.pop(post_id, None)
        self.store.pivots = {pivot for pivot in self.store.pivots if pivot[1] != post_id}

    def _unique_slug(self, base_slug: str, post_id: int) -> str:
        taken = {post.slug for post in self.store.posts.values() if post.id != post_id}
        slug = base_slug
        counter = 1
        while slug in taken:
            slug = f"{base_slug}-{counter}"
            counter += 1
        return slug


class InMemoryTagRepository:
    """TagRepository over an InMemoryStore."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    def _sorted(self, tags: Iterable[TagRecord]) -> list[TagRecord]:
        return [replace(tag) for tag in sorted(tags, key=lambda tag: tag.name)]

    async def list_all(self) -> list[TagRecord]:
        self.store.hit()
        return self._sorted(self.store.tags.values())

    async def list_all_with_post_count(self) -> list[tuple[TagRecord, int]]:
        self.store.hit()
        return [
            (
                tag,
                self.store.published_posts_of(
                    post_id for tag_id, post_id in self.store.pivots if tag_id == tag.id
                ),
            )
            for tag in self._sorted(self.store.tags.values())
        ]

    async def list_for_post(self, post: PostRecord) -> list[TagRecord]:
        self.store.hit()
        post_id = require_id(post)
        return self._sorted(
            self.store.tags[tag_id] for tag_id, p_id in self.store.pivots if p_id == post_id
        )

    async def list_for_all_posts(self) -> dict[int, list[TagRecord]]:
        self.store.hit()
        tags_for_posts: dict[int, list[TagRecord]] = {}
        for tag_id, post_id in self.store.pivots:
            tags_for_posts.setdefault(post_id, []).append(self.store.tags[tag_id])
        return {post_id: self._sorted(tags) for post_id, tags in tags_for_posts.items()}

    async def get_by_name(self, name: str) -> Optional[TagRecord]:
        self.store.hit()
        for tag in self.store.tags.values():
            if tag.name == name:
                return replace(tag)
        return None

    async def save(self, tag: TagRecord) -> TagRecord:
        self.store.hit()
        # mirrors the unique constraint on tag names
        if any(other.name == tag.name and other.id != tag.id for other in self.store.tags.values()):
            raise DependencyFailure(f"Tag {tag.name!r} already exists")
        saved = replace(tag, id=tag.id or self.store.next_id())
        self.store.tags[saved.id] = saved
        return replace(saved)

    async def delete_all_for_post(self, post: PostRecord) -> None:
        self.store.hit()
        post_id = require_id(post)
        self.store.pivots = {pivot for pivot in self.store.pivots if pivot[1] != post_id}

    async def detach(self, tag: TagRecord, post: PostRecord) -> None:
        self.store.hit()
        self.store.pivots.discard((require_id(tag), require_id(post)))

    async def attach(self, tag: TagRecord, post: PostRecord) -> None:
        self.store.hit()
        self.store.pivots.add((require_id(tag), require_id(post)))

    async def delete_orphaned(self) -> int:
        self.store.hit()
        in_use = {tag_id for tag_id, _ in self.store.pivots}
        orphans = [tag_id for tag_id in self.store.tags if tag_id not in in_use]
        for tag_id in orphans:
            del self.store.tags[tag_id]
        return len(orphans)


class InMemoryUserRepository:
    """UserRepository over an InMemoryStore."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    def _sorted(self) -> list[UserRecord]:
        return [
            replace(user)
            for user in sorted(self.store.users.values(), key=lambda user: user.username)
        ]

    async def list_all(self) -> list[UserRecord]:
        self.store.hit()
        return self._sorted()

    async def list_all_with_post_count(self) -> list[tuple[UserRecord, int]]:
        self.store.hit()
        return [
            (
                user,
                sum(
                    1
                    for post in self.store.posts.values()
                    if post.published and post.author_id == user.id
                ),
            )
            for user in self._sorted()
        ]

    async def get_by_id(self, user_id: int) -> Optional[UserRecord]:
        self.store.hit()
        user = self.store.users.get(user_id)
        return replace(user) if user else None

    async def get_by_username(self, username: str) -> Optional[UserRecord]:
        self.store.hit()
        for user in self.store.users.values():
            if user.username == username:
                return replace(user)
        return None

    async def save(self, user: UserRecord) -> UserRecord:
        self.store.hit()
        if user.id is not None and user.id not in self.store.users:
            raise NotFound(f"User {user.id} does not exist")
        saved = replace(user, id=user.id or self.store.next_id())
        self.store.users[saved.id] = saved
        return replace(saved)

    async def delete(self, user: UserRecord) -> None:
        self.store.hit()
        user_id = require_id(user)
        self.store.users.pop(user_id, None)
        for post in [post for post in self.store.posts.values() if post.author_id == user_id]:
            self.store.posts.pop(post.id)
            self.store.pivots = {pivot for pivot in self.store.pivots if pivot[1] != post.id}

    async def count(self) -> int:
        self.store.hit()
        return len(self.store.users)
