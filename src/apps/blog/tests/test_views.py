"""
API tests for the blog endpoints, going through URL routing, the views,
the ORM repositories and the JSON presenter.
"""

import pytest
from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status

from src.apps.blog.models import PostTag, Tag

User = get_user_model()


@pytest.fixture
def rust(make_post):
    """A tag attached to one published post."""
    tag = Tag.objects.create(name="rust")
    make_post(title="Rust ownership").tags.add(tag)
    return tag


class TestBlogIndex:
    def test_lists_newest_published_posts(self, api_client, make_post):
        newest = make_post(title="Newest")
        make_post(title="Hidden draft", published=False)
        make_post(title="Older")

        response = api_client.get(reverse("blog:index"))

        assert response.status_code == status.HTTP_200_OK
        assert [post["title"] for post in response.data["posts"]] == ["Newest", "Older"]
        assert response.data["posts"][0]["slug"] == newest.slug
        assert response.data["authors"][0]["display_name"] == "Test Author"
        assert response.data["pagination"]["total_pages"] == 1

    def test_pagination_and_query_string(self, api_client, make_post):
        for _ in range(25):
            make_post()

        response = api_client.get(reverse("blog:index"), {"page": "3"})

        pagination = response.data["pagination"]
        assert len(response.data["posts"]) == 5
        assert pagination["current_page"] == 3
        assert pagination["total_pages"] == 3
        assert pagination["offset"] == 20
        assert pagination["current_query"] == "page=3"
        assert pagination["has_next"] is False

    def test_invalid_page_falls_back_to_first(self, api_client, make_post):
        make_post()

        response = api_client.get(reverse("blog:index"), {"page": "abc"})

        assert response.status_code == status.HTTP_200_OK
        assert response.data["pagination"]["current_page"] == 1

    @pytest.mark.parametrize("page", ["99999999999999999999", "\u0663"])
    def test_oversized_or_non_ascii_page_falls_back_to_first(self, api_client, make_post, page):
        make_post(title="Django pagination")

        index = api_client.get(reverse("blog:index"), {"page": page})
        search = api_client.get(reverse("blog:search"), {"term": "Django", "page": page})

        for response in (index, search):
            assert response.status_code == status.HTTP_200_OK
            assert response.data["pagination"]["current_page"] == 1
            assert len(response.data["posts"]) == 1

    def test_tags_for_posts_keyed_by_post_id(self, api_client, rust):
        response = api_client.get(reverse("blog:index"))

        post_id = str(response.data["posts"][0]["id"])
        assert response.data["tags_for_posts"][post_id][0]["name"] == "rust"

    def test_posts_index_redirects(self, api_client):
        response = api_client.get("/posts/")

        assert response.status_code == status.HTTP_301_MOVED_PERMANENTLY
        assert response["Location"] == reverse("blog:index")


class TestPostDetail:
    def test_published_post(self, api_client, rust):
        response = api_client.get(reverse("blog:post-detail", kwargs={"slug": "rust-ownership"}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["post"]["title"] == "Rust ownership"
        assert response.data["author"]["username"] == "testuser"
        assert [tag["name"] for tag in response.data["tags"]] == ["rust"]

    def test_draft_is_not_found(self, api_client, make_post):
        make_post(title="Secret plans", published=False)

        response = api_client.get(reverse("blog:post-detail", kwargs={"slug": "secret-plans"}))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "error" in response.data

    def test_missing_post(self, api_client):
        response = api_client.get(reverse("blog:post-detail", kwargs={"slug": "nope"}))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {"error": "No post with slug 'nope'"}


class TestTags:
    def test_tag_list_with_published_counts(self, api_client, make_post, rust):
        make_post(published=False).tags.add(rust)
        idle = Tag.objects.create(name="idle")

        response = api_client.get(reverse("blog:tag-list"))

        assert response.status_code == status.HTTP_200_OK
        assert [tag["name"] for tag in response.data["tags"]] == ["idle", "rust"]
        assert response.data["tag_post_counts"] == {str(rust.pk): 1, str(idle.pk): 0}

    def test_tag_detail(self, api_client, rust):
        response = api_client.get(reverse("blog:tag-detail", kwargs={"name": "rust"}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["tag"]["name"] == "rust"
        assert response.data["total_posts"] == 1
        assert [post["title"] for post in response.data["posts"]] == ["Rust ownership"]

    @pytest.mark.parametrize("name", ["machine learning", "c++", "café"])
    def test_tag_detail_decodes_url_encoded_names(self, api_client, make_post, name):
        make_post().tags.add(Tag.objects.create(name=name))
        listing = api_client.get(reverse("blog:tag-list")).data
        encoded = listing["tags"][0]["url_encoded_name"]

        response = api_client.get(f"/tags/{encoded}/")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["tag"]["name"] == name

    def test_unknown_tag(self, api_client):
        response = api_client.get(reverse("blog:tag-detail", kwargs={"name": "missing"}))

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestAuthors:
    def test_author_list(self, api_client, user, make_post):
        make_post()
        make_post(published=False)

        response = api_client.get(reverse("blog:author-list"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["author_post_counts"] == {str(user.pk): 1}

    def test_author_by_username(self, api_client, user, make_post):
        make_post(title="Mine")
        make_post(title="Not yet", published=False)

        response = api_client.get(reverse("blog:author-detail", kwargs={"username": "testuser"}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["author"]["id"] == user.pk
        assert response.data["post_count"] == 1
        assert [post["title"] for post in response.data["posts"]] == ["Mine"]

    def test_author_by_id(self, api_client, user):
        response = api_client.get(reverse("blog:author-detail-by-id", kwargs={"user_id": str(user.pk)}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["author"]["username"] == "testuser"

    def test_invalid_author_id(self, api_client):
        response = api_client.get(reverse("blog:author-detail-by-id", kwargs={"user_id": "abc"}))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {"error": "Unable to convert 'abc' to a User ID"}

    def test_unknown_author(self, api_client):
        response = api_client.get(reverse("blog:author-detail-by-id", kwargs={"user_id": "9999"}))

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestSearch:
    def test_matches_published_posts(self, api_client, make_post):
        make_post(title="Async Django")
        make_post(title="Draft about Django", published=False)

        response = api_client.get(reverse("blog:search"), {"term": "django"})

        assert response.status_code == status.HTTP_200_OK
        assert response.data["search_term"] == "django"
        assert response.data["total_results"] == 1
        assert response.data["posts"][0]["title"] == "Async Django"

    def test_blank_term(self, api_client, make_post):
        make_post()

        response = api_client.get(reverse("blog:search"), {"term": "  "})

        assert response.status_code == status.HTTP_200_OK
        assert response.data["search_term"] is None
        assert response.data["total_results"] == 0
        assert response.data["posts"] == []


class TestPostTags:
    def test_list_tags_of_post(self, api_client, make_post):
        post = make_post()
        post.tags.add(Tag.objects.create(name="b"), Tag.objects.create(name="a"))

        response = api_client.get(reverse("blog:post-tags", kwargs={"post_id": str(post.pk)}))

        assert response.status_code == status.HTTP_200_OK
        assert [tag["name"] for tag in response.data] == ["a", "b"]

    def test_tagging_requires_authentication(self, api_client, make_post):
        post = make_post()

        response = api_client.post(
            reverse("blog:post-tags", kwargs={"post_id": str(post.pk)}), {"name": "rust"}, format="json"
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Tag.objects.exists()

    def test_tag_post(self, authenticated_api_client, make_post):
        first, second = make_post(), make_post()

        for post in (first, second):
            response = authenticated_api_client.post(
                reverse("blog:post-tags", kwargs={"post_id": str(post.pk)}),
                {"name": "rust"},
                format="json",
            )
            assert response.status_code == status.HTTP_201_CREATED
            assert response.data["name"] == "rust"

        assert Tag.objects.count() == 1
        assert PostTag.objects.count() == 2

    def test_tag_name_is_required(self, authenticated_api_client, make_post):
        post = make_post()

        response = authenticated_api_client.post(
            reverse("blog:post-tags", kwargs={"post_id": str(post.pk)}), {}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.parametrize(
        "post_id, expected_status",
        [("abc", status.HTTP_400_BAD_REQUEST), ("9999", status.HTTP_404_NOT_FOUND)],
    )
    def test_unresolvable_post(self, authenticated_api_client, post_id, expected_status):
        response = authenticated_api_client.post(
            reverse("blog:post-tags", kwargs={"post_id": post_id}), {"name": "rust"}, format="json"
        )

        assert response.status_code == expected_status
        assert not Tag.objects.exists()

    def test_untag_post_keeps_tag(self, authenticated_api_client, rust):
        post = rust.posts.get()

        response = authenticated_api_client.delete(
            reverse("blog:post-tag-detail", kwargs={"post_id": str(post.pk), "name": "rust"})
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not PostTag.objects.exists()
        assert Tag.objects.filter(name="rust").exists()

    def test_untag_unknown_tag(self, authenticated_api_client, make_post):
        post = make_post()

        response = authenticated_api_client.delete(
            reverse("blog:post-tag-detail", kwargs={"post_id": str(post.pk), "name": "nope"})
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_untag_requires_authentication(self, api_client, rust):
        post = rust.posts.get()

        response = api_client.delete(
            reverse("blog:post-tag-detail", kwargs={"post_id": str(post.pk), "name": "rust"})
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert PostTag.objects.count() == 1
