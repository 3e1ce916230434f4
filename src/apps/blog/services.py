"""
Blog query orchestration.

One method per view. Each computes the page offset, fans the independent
repository queries out concurrently, waits for all of them and hands the
assembled payload to the presenter. Single-entity views receive their
primary record already resolved (see ``resolvers``), since the follow-up
queries depend on it.

Any failing sub-query aborts the whole view; nothing partial is rendered.
"""

import logging
from typing import Any, Optional

from src.apps.core.concurrency import fan_out
from src.apps.core.exceptions import ConsistencyViolation
from src.apps.core.pagination import page_offset, paginate

from .presenters import BlogPresenter
from .records import PostRecord, TagRecord, UserRecord
from .repositories.base import PostRepository, TagRepository, UserRepository, index_counts

logger = logging.getLogger(__name__)


class BlogQueryService:
    """
    Assembles the data behind every public blog view.

    Dependencies are passed in explicitly so views, tasks and tests can
    choose the storage adapter and the presenter.
    """

    def __init__(
        self,
        *,
        posts: PostRepository,
        tags: TagRepository,
        users: UserRepository,
        presenter: BlogPresenter,
        posts_per_page: int,
    ) -> None:
        if posts_per_page <= 0:
            raise ValueError(f"posts_per_page must be positive, got {posts_per_page}")
        self.posts = posts
        self.tags = tags
        self.users = users
        self.presenter = presenter
        self.posts_per_page = posts_per_page

    def _offset(self, page: int) -> int:
        return page_offset(page, self.posts_per_page)

    async def index_view(self, *, page: int = 1, query: Optional[str] = None) -> Any:
        """Newest published posts, plus everything the sidebar needs."""
        posts, tags, authors, total_posts, tags_for_posts = await fan_out(
            self.posts.list_by_recency(
                include_drafts=False, count=self.posts_per_page, offset=self._offset(page)
            ),
            self.tags.list_all(),
            self.users.list_all(),
            self.posts.count_by_recency(include_drafts=False),
            self.tags.list_for_all_posts(),
        )
        return self.presenter.index_view(
            posts=posts,
            tags=tags,
            authors=authors,
            tags_for_posts=tags_for_posts,
            pagination=paginate(page, total_posts, self.posts_per_page, query),
        )

    async def post_view(self, *, post: PostRecord) -> Any:
        """A single post with its author and tags."""
        author, tags = await fan_out(
            self.users.get_by_id(post.author_id),
            self.tags.list_for_post(post),
        )
        if author is None:
            logger.error(
                "Post references a missing author.",
                extra={"post_id": post.id, "author_id": post.author_id},
            )
            raise ConsistencyViolation(
                f"Post {post.id} references missing author {post.author_id}"
            )
        return self.presenter.post_view(post=post, author=author, tags=tags)

    async def tag_view(
        self, *, tag: TagRecord, page: int = 1, query: Optional[str] = None
    ) -> Any:
        posts, total_posts, authors = await fan_out(
            self.posts.list_published_for_tag(
                tag, count=self.posts_per_page, offset=self._offset(page)
            ),
            self.posts.count_published_for_tag(tag),
            self.users.list_all(),
        )
        return self.presenter.tag_view(
            tag=tag,
            posts=posts,
            authors=authors,
            total_posts=total_posts,
            pagination=paginate(page, total_posts, self.posts_per_page, query),
        )

    async def author_view(
        self, *, author: UserRecord, page: int = 1, query: Optional[str] = None
    ) -> Any:
        posts, post_count, tags_for_posts = await fan_out(
            self.posts.list_for_author(
                author,
                include_drafts=False,
                count=self.posts_per_page,
                offset=self._offset(page),
            ),
            self.posts.count_for_author(author),
            self.tags.list_for_all_posts(),
        )
        return self.presenter.author_view(
            author=author,
            posts=posts,
            post_count=post_count,
            tags_for_posts=tags_for_posts,
            pagination=paginate(page, post_count, self.posts_per_page, query),
        )

    async def all_tags_view(self) -> Any:
        tags_with_count = await self.tags.list_all_with_post_count()
        return self.presenter.all_tags_view(
            tags=[tag for tag, _ in tags_with_count],
            tag_post_counts=index_counts(tags_with_count),
        )

    async def all_authors_view(self) -> Any:
        authors_with_count = await self.users.list_all_with_post_count()
        return self.presenter.all_authors_view(
            authors=[author for author, _ in authors_with_count],
            author_post_counts=index_counts(authors_with_count),
        )

    async def search_view(
        self, *, term: Optional[str], page: int = 1, query: Optional[str] = None
    ) -> Any:
        """
        Published posts matching ``term``.

        A missing or blank term yields an empty result without touching
        storage.
        """
        search_term = (term or "").strip()
        if not search_term:
            return self.presenter.search_view(
                total_results=0,
                posts=[],
                authors=[],
                search_term=None,
                tags_for_posts={},
                pagination=paginate(page, 0, self.posts_per_page, query),
            )

        posts, total_results, authors, tags_for_posts = await fan_out(
            self.posts.search_published(
                search_term, count=self.posts_per_page, offset=self._offset(page)
            ),
            self.posts.count_published_for_search_term(search_term),
            self.users.list_all(),
            self.tags.list_for_all_posts(),
        )
        return self.presenter.search_view(
            total_results=total_results,
            posts=posts,
            authors=authors,
            search_term=search_term,
            tags_for_posts=tags_for_posts,
            pagination=paginate(page, total_results, self.posts_per_page, query),
        )
