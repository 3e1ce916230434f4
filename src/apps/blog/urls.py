"""
Blog URL configuration.

Author and tag pages can be switched off with ``BLOG_ENABLE_AUTHOR_PAGES``
and ``BLOG_ENABLE_TAG_PAGES``.
"""

from django.conf import settings
from django.urls import path
from django.views.generic import RedirectView

from .views import (
    AuthorDetailAPIView,
    AuthorListAPIView,
    BlogIndexAPIView,
    PostDetailAPIView,
    PostTagDetailAPIView,
    PostTagsAPIView,
    SearchAPIView,
    TagDetailAPIView,
    TagListAPIView,
)

app_name = "blog"


def build_urlpatterns(*, enable_author_pages: bool, enable_tag_pages: bool) -> list:
    urlpatterns = [
        path("", BlogIndexAPIView.as_view(), name="index"),
        path(
            "posts/",
            RedirectView.as_view(pattern_name="blog:index", permanent=True),
            name="post-index-redirect",
        ),
        path("posts/<str:slug>/", PostDetailAPIView.as_view(), name="post-detail"),
        path("search/", SearchAPIView.as_view(), name="search"),
        # Tag management, addressed by numeric post id
        path("api/posts/<str:post_id>/tags/", PostTagsAPIView.as_view(), name="post-tags"),
        path(
            "api/posts/<str:post_id>/tags/<path:name>/",
            PostTagDetailAPIView.as_view(),
            name="post-tag-detail",
        ),
    ]
    if enable_author_pages:
        urlpatterns += [
            path("authors/", AuthorListAPIView.as_view(), name="author-list"),
            path(
                "authors/<str:username>/",
                AuthorDetailAPIView.as_view(),
                name="author-detail",
            ),
            path(
                "api/authors/<str:user_id>/",
                AuthorDetailAPIView.as_view(),
                name="author-detail-by-id",
            ),
        ]
    if enable_tag_pages:
        urlpatterns += [
            path("tags/", TagListAPIView.as_view(), name="tag-list"),
            path("tags/<path:name>/", TagDetailAPIView.as_view(), name="tag-detail"),
        ]
    return urlpatterns


urlpatterns = build_urlpatterns(
    enable_author_pages=settings.BLOG_ENABLE_AUTHOR_PAGES,
    enable_tag_pages=settings.BLOG_ENABLE_TAG_PAGES,
)
