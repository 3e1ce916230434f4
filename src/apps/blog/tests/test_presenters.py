"""
Tests for the JSON presenter.
"""

from datetime import datetime, timezone

from src.apps.blog.presenters import JSONBlogPresenter
from src.apps.blog.records import PostRecord, TagRecord, UserRecord
from src.apps.core.pagination import paginate


def _post(post_id):
    return PostRecord(
        id=post_id,
        title=f"Post {post_id}",
        contents="Body",
        author_id=1,
        slug=f"post-{post_id}",
        published=True,
        created=datetime(2024, 1, post_id, tzinfo=timezone.utc),
    )


def test_index_view_only_renders_tags_of_listed_posts():
    presenter = JSONBlogPresenter()
    rust = TagRecord(id=1, name="rust")

    payload = presenter.index_view(
        posts=[_post(1), _post(2)],
        tags=[rust],
        authors=[UserRecord(id=1, username="ada")],
        tags_for_posts={1: [rust], 3: [rust]},
        pagination=paginate(1, 2, 10),
    )

    assert payload["tags_for_posts"] == {
        "1": [{"id": 1, "name": "rust", "url_encoded_name": "rust"}],
        "2": [],
    }
    assert payload["pagination"]["has_next"] is False
    assert payload["authors"][0]["display_name"] == "ada"


def test_search_view_without_term():
    payload = JSONBlogPresenter().search_view(
        total_results=0,
        posts=[],
        authors=[],
        search_term=None,
        tags_for_posts={},
        pagination=paginate(1, 0, 10),
    )

    assert payload["search_term"] is None
    assert payload["pagination"]["total_pages"] == 0


def test_counts_are_keyed_by_string_ids():
    payload = JSONBlogPresenter().all_tags_view(
        tags=[TagRecord(id=7, name="async")], tag_post_counts={7: 3}
    )

    assert payload["tag_post_counts"] == {"7": 3}
