"""
Presenter contract and the default JSON presenter.

The orchestrator hands fully assembled data to a presenter and returns
whatever the presenter produces; it never renders anything itself.
"""

from typing import Any, Optional, Protocol

from src.apps.core.pagination import PaginationInformation

from .records import PostRecord, TagRecord, UserRecord
from .serializers import AuthorSerializer, PaginationSerializer, PostSerializer, TagSerializer


class BlogPresenter(Protocol):
    """Renders the aggregate payload of each blog view."""

    def index_view(
        self,
        *,
        posts: list[PostRecord],
        tags: list[TagRecord],
        authors: list[UserRecord],
        tags_for_posts: dict[int, list[TagRecord]],
        pagination: PaginationInformation,
    ) -> Any:  # pragma: no cover - Protocol
        ...

    def post_view(
        self, *, post: PostRecord, author: UserRecord, tags: list[TagRecord]
    ) -> Any:  # pragma: no cover - Protocol
        ...

    def tag_view(
        self,
        *,
        tag: TagRecord,
        posts: list[PostRecord],
        authors: list[UserRecord],
        total_posts: int,
        pagination: PaginationInformation,
    ) -> Any:  # pragma: no cover - Protocol
        ...

    def author_view(
        self,
        *,
        author: UserRecord,
        posts: list[PostRecord],
        post_count: int,
        tags_for_posts: dict[int, list[TagRecord]],
        pagination: PaginationInformation,
    ) -> Any:  # pragma: no cover - Protocol
        ...

    def all_tags_view(
        self, *, tags: list[TagRecord], tag_post_counts: dict[int, int]
    ) -> Any:  # pragma: no cover - Protocol
        ...

    def all_authors_view(
        self, *, authors: list[UserRecord], author_post_counts: dict[int, int]
    ) -> Any:  # pragma: no cover - Protocol
        ...

    def search_view(
        self,
        *,
        total_results: int,
        posts: list[PostRecord],
        authors: list[UserRecord],
        search_term: Optional[str],
        tags_for_posts: dict[int, list[TagRecord]],
        pagination: PaginationInformation,
    ) -> Any:  # pragma: no cover - Protocol
        ...


def _tags_for_posts(tags_for_posts: dict[int, list[TagRecord]], posts: list[PostRecord]) -> dict:
    # only the posts on the page are rendered
    return {
        str(post.id): TagSerializer(tags_for_posts.get(post.id, []), many=True).data
        for post in posts
    }


def _counts(counts: dict[int, int]) -> dict[str, int]:
    return {str(key): value for key, value in counts.items()}


class JSONBlogPresenter:
    """Presenter producing JSON-ready dicts for DRF responses."""

    def index_view(self, *, posts, tags, authors, tags_for_posts, pagination) -> dict:
        return {
            "posts": PostSerializer(posts, many=True).data,
            "tags": TagSerializer(tags, many=True).data,
            "authors": AuthorSerializer(authors, many=True).data,
            "tags_for_posts": _tags_for_posts(tags_for_posts, posts),
            "pagination": PaginationSerializer(pagination).data,
        }

    def post_view(self, *, post, author, tags) -> dict:
        return {
            "post": PostSerializer(post).data,
            "author": AuthorSerializer(author).data,
            "tags": TagSerializer(tags, many=True).data,
        }

    def tag_view(self, *, tag, posts, authors, total_posts, pagination) -> dict:
        return {
            "tag": TagSerializer(tag).data,
            "posts": PostSerializer(posts, many=True).data,
            "authors": AuthorSerializer(authors, many=True).data,
            "total_posts": total_posts,
            "pagination": PaginationSerializer(pagination).data,
        }

    def author_view(self, *, author, posts, post_count, tags_for_posts, pagination) -> dict:
        return {
            "author": AuthorSerializer(author).data,
            "posts": PostSerializer(posts, many=True).data,
            "post_count": post_count,
            "tags_for_posts": _tags_for_posts(tags_for_posts, posts),
            "pagination": PaginationSerializer(pagination).data,
        }

    def all_tags_view(self, *, tags, tag_post_counts) -> dict:
        return {
            "tags": TagSerializer(tags, many=True).data,
            "tag_post_counts": _counts(tag_post_counts),
        }

    def all_authors_view(self, *, authors, author_post_counts) -> dict:
        return {
            "authors": AuthorSerializer(authors, many=True).data,
            "author_post_counts": _counts(author_post_counts),
        }

    def search_view(
        self, *, total_results, posts, authors, search_term, tags_for_posts, pagination
    ) -> dict:
        return {
            "search_term": search_term,
            "total_results": total_results,
            "posts": PostSerializer(posts, many=True).data,
            "authors": AuthorSerializer(authors, many=True).data,
            "tags_for_posts": _tags_for_posts(tags_for_posts, posts),
            "pagination": PaginationSerializer(pagination).data,
        }
