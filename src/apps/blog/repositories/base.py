"""
Repository contracts for the content core.

Services depend only on these protocols; concrete adapters (Django ORM,
in-memory) live next to this module. Every operation is a coroutine so
callers can issue several of them concurrently. "Published" operations
never return drafts; the ``include_drafts`` switches are reserved for
authoring code and are never set by public views.
"""

from typing import Iterable, Optional, Protocol, TypeVar

from src.apps.core.exceptions import ConsistencyViolation

from ..records import PostRecord, TagRecord, UserRecord


class PostRepository(Protocol):
    """Query/command surface for posts."""

    async def list_by_recency(
        self, include_drafts: bool, count: Optional[int] = None, offset: int = 0
    ) -> list[PostRecord]:  # pragma: no cover - Protocol
        ...

    async def count_by_recency(self, include_drafts: bool) -> int:  # pragma: no cover - Protocol
        ...

    async def list_for_author(
        self, author: UserRecord, include_drafts: bool, count: int, offset: int
    ) -> list[PostRecord]:  # pragma: no cover - Protocol
        ...

    async def count_for_author(
        self, author: UserRecord, include_drafts: bool = False
    ) -> int:  # pragma: no cover - Protocol
        ...

    async def get_by_slug(self, slug: str) -> Optional[PostRecord]:  # pragma: no cover - Protocol
        ...

    async def get_by_id(self, post_id: int) -> Optional[PostRecord]:  # pragma: no cover - Protocol
        ...

    async def list_published_for_tag(
        self, tag: TagRecord, count: int, offset: int
    ) -> list[PostRecord]:  # pragma: no cover - Protocol
        ...

    async def count_published_for_tag(self, tag: TagRecord) -> int:  # pragma: no cover - Protocol
        ...

    async def search_published(
        self, term: str, count: int, offset: int
    ) -> list[PostRecord]:  # pragma: no cover - Protocol
        """Published posts whose title or contents contain ``term``, newest first."""
        ...

    async def count_published_for_search_term(self, term: str) -> int:  # pragma: no cover - Protocol
        ...

    async def save(self, post: PostRecord) -> PostRecord:  # pragma: no cover - Protocol
        """Insert or update ``post`` and return it with ``id`` and ``slug`` set."""
        ...

    async def delete(self, post: PostRecord) -> None:  # pragma: no cover - Protocol
        ...


class TagRepository(Protocol):
    """Query/command surface for tags and tag/post pivots."""

    async def list_all(self) -> list[TagRecord]:  # pragma: no cover - Protocol
        ...

    async def list_all_with_post_count(
        self,
    ) -> list[tuple[TagRecord, int]]:  # pragma: no cover - Protocol
        """Every tag with the number of published posts carrying it."""
        ...

    async def list_for_post(self, post: PostRecord) -> list[TagRecord]:  # pragma: no cover - Protocol
        ...

    async def list_for_all_posts(
        self,
    ) -> dict[int, list[TagRecord]]:  # pragma: no cover - Protocol
        """Tags keyed by post id, fetched in bulk to avoid one query per post."""
        ...

    async def get_by_name(self, name: str) -> Optional[TagRecord]:  # pragma: no cover - Protocol
        ...

    async def save(self, tag: TagRecord) -> TagRecord:  # pragma: no cover - Protocol
        ...

    async def delete_all_for_post(self, post: PostRecord) -> None:  # pragma: no cover - Protocol
        """Remove every pivot of ``post``; the tag rows are kept."""
        ...

    async def detach(self, tag: TagRecord, post: PostRecord) -> None:  # pragma: no cover - Protocol
        ...

    async def attach(self, tag: TagRecord, post: PostRecord) -> None:  # pragma: no cover - Protocol
        ...

    async def delete_orphaned(self) -> int:  # pragma: no cover - Protocol
        """Delete tags without any pivot and return how many were removed."""
        ...


class UserRepository(Protocol):
    """Query/command surface for authors."""

    async def list_all(self) -> list[UserRecord]:  # pragma: no cover - Protocol
        ...

    async def list_all_with_post_count(
        self,
    ) -> list[tuple[UserRecord, int]]:  # pragma: no cover - Protocol
        """Every user with the number of published posts they wrote."""
        ...

    async def get_by_id(self, user_id: int) -> Optional[UserRecord]:  # pragma: no cover - Protocol
        ...

    async def get_by_username(self, username: str) -> Optional[UserRecord]:  # pragma: no cover - Protocol
        ...

    async def save(self, user: UserRecord) -> UserRecord:  # pragma: no cover - Protocol
        ...

    async def delete(self, user: UserRecord) -> None:  # pragma: no cover - Protocol
        ...

    async def count(self) -> int:  # pragma: no cover - Protocol
        ...


RecordT = TypeVar("RecordT", TagRecord, UserRecord, PostRecord)


def index_counts(pairs: Iterable[tuple[RecordT, int]]) -> dict[int, int]:
    """
    Turn ``(record, count)`` pairs into a ``{record.id: count}`` mapping.

    Raises:
        ConsistencyViolation: If a record has no id; storage should never
            hand out unsaved records.
    """
    counts: dict[int, int] = {}
    for record, count in pairs:
        if record.id is None:
            raise ConsistencyViolation(f"{type(record).__name__} {record!r} has no id")
        counts[record.id] = count
    return counts


def require_id(record: RecordT) -> int:
    """Return the id of a record that must already be persisted."""
    if record.id is None:
        raise ConsistencyViolation(f"{type(record).__name__} {record!r} has no id")
    return record.id
