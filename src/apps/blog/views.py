"""API views for the blog.

Views decode request parameters, resolve route entities and delegate to
``BlogQueryService`` or the tag lifecycle functions. Core errors are turned
into responses by ``content_exception_handler``.
"""

from typing import Any

from asgiref.sync import async_to_sync
from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticatedOrReadOnly
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from src.apps.core.pagination import page_number

from . import resolvers, tagging
from .presenters import JSONBlogPresenter
from .repositories import DjangoPostRepository, DjangoTagRepository, DjangoUserRepository
from .serializers import TagNameSerializer, TagSerializer
from .services import BlogQueryService

PAGE_PARAMETER = OpenApiParameter("page", int, description="1-based page number.")


def build_query_service() -> BlogQueryService:
    """Wire the query service to the database and the JSON presenter."""
    return BlogQueryService(
        posts=DjangoPostRepository(),
        tags=DjangoTagRepository(),
        users=DjangoUserRepository(),
        presenter=JSONBlogPresenter(),
        posts_per_page=settings.BLOG_POSTS_PER_PAGE,
    )


class BlogAPIView(APIView):  # type: ignore[misc]
    """Base class for the public, read-only blog views."""

    permission_classes = [AllowAny]

    def get_query_service(self) -> BlogQueryService:
        return build_query_service()

    @staticmethod
    def page(request: Request) -> int:
        return page_number(request.query_params.get("page"))

    @staticmethod
    def query_string(request: Request) -> str:
        return request.META.get("QUERY_STRING", "")


@extend_schema(tags=["Blog"])
class BlogIndexAPIView(BlogAPIView):
    @extend_schema(
        summary="Blog index",
        description="Newest published posts with all tags and authors.",
        parameters=[PAGE_PARAMETER],
    )
    def get(self, request: Request, *args: Any, **kwargs: Any) -> Response:
        service = self.get_query_service()
        payload = async_to_sync(service.index_view)(
            page=self.page(request), query=self.query_string(request)
        )
        return Response(payload)


@extend_schema(tags=["Blog"])
class PostDetailAPIView(BlogAPIView):
    @extend_schema(summary="Retrieve a published post by its slug")
    def get(self, request: Request, slug: str, *args: Any, **kwargs: Any) -> Response:
        service = self.get_query_service()

        async def load() -> Any:
            post = await resolvers.resolve_post_slug(slug, posts=service.posts)
            return await service.post_view(post=post)

        return Response(async_to_sync(load)())


@extend_schema(tags=["Tags"])
class TagListAPIView(BlogAPIView):
    @extend_schema(summary="All tags with their published post counts")
    def get(self, request: Request, *args: Any, **kwargs: Any) -> Response:
        service = self.get_query_service()
        return Response(async_to_sync(service.all_tags_view)())


@extend_schema(tags=["Tags"])
class TagDetailAPIView(BlogAPIView):
    @extend_schema(
        summary="Published posts carrying a tag",
        parameters=[PAGE_PARAMETER],
    )
    def get(self, request: Request, name: str, *args: Any, **kwargs: Any) -> Response:
        service = self.get_query_service()

        async def load() -> Any:
            tag = await resolvers.resolve_tag(name, tags=service.tags)
            return await service.tag_view(
                tag=tag, page=self.page(request), query=self.query_string(request)
            )

        return Response(async_to_sync(load)())


@extend_schema(tags=["Authors"])
class AuthorListAPIView(BlogAPIView):
    @extend_schema(summary="All authors with their published post counts")
    def get(self, request: Request, *args: Any, **kwargs: Any) -> Response:
        service = self.get_query_service()
        return Response(async_to_sync(service.all_authors_view)())


@extend_schema(tags=["Authors"])
class AuthorDetailAPIView(BlogAPIView):
    """Author page, addressed by username (public URL) or by numeric id (API)."""

    @extend_schema(
        summary="Published posts of an author",
        parameters=[PAGE_PARAMETER],
    )
    def get(self, request: Request, *args: Any, **kwargs: Any) -> Response:
        service = self.get_query_service()

        async def load() -> Any:
            if "user_id" in kwargs:
                author = await resolvers.resolve_user(kwargs["user_id"], users=service.users)
            else:
                author = await resolvers.resolve_username(
                    kwargs["username"], users=service.users
                )
            return await service.author_view(
                author=author, page=self.page(request), query=self.query_string(request)
            )

        return Response(async_to_sync(load)())


@extend_schema(tags=["Blog"])
class SearchAPIView(BlogAPIView):
    @extend_schema(
        summary="Search published posts",
        description="Matches the term against titles and contents. A blank term returns no results.",
        parameters=[
            OpenApiParameter("term", str, description="Search term."),
            PAGE_PARAMETER,
        ],
    )
    def get(self, request: Request, *args: Any, **kwargs: Any) -> Response:
        service = self.get_query_service()
        payload = async_to_sync(service.search_view)(
            term=request.query_params.get("term"),
            page=self.page(request),
            query=self.query_string(request),
        )
        return Response(payload)


@extend_schema(tags=["Tags"])
class PostTagsAPIView(APIView):  # type: ignore[misc]
    """List the tags of a post, or tag it."""

    permission_classes = [IsAuthenticatedOrReadOnly]

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.posts = DjangoPostRepository()
        self.tags = DjangoTagRepository()

    @extend_schema(summary="Tags of a post", responses={200: TagSerializer(many=True)})
    def get(self, request: Request, post_id: str, *args: Any, **kwargs: Any) -> Response:
        async def load() -> Any:
            post = await resolvers.resolve_post(post_id, posts=self.posts)
            return await self.tags.list_for_post(post)

        tags = async_to_sync(load)()
        return Response(TagSerializer(tags, many=True).data)

    @extend_schema(
        summary="Tag a post",
        description="Reuses the tag with this exact name or creates it, then attaches it.",
        request=TagNameSerializer,
        responses={201: TagSerializer},
    )
    def post(self, request: Request, post_id: str, *args: Any, **kwargs: Any) -> Response:
        serializer = TagNameSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        name = serializer.validated_data["name"]

        async def tag_post() -> Any:
            post = await resolvers.resolve_post(post_id, posts=self.posts)
            return await tagging.add_tag(name, post, tags=self.tags)

        tag = async_to_sync(tag_post)()
        return Response(TagSerializer(tag).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Tags"])
class PostTagDetailAPIView(APIView):  # type: ignore[misc]
    """Remove one tag from a post."""

    permission_classes = [IsAuthenticatedOrReadOnly]

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.posts = DjangoPostRepository()
        self.tags = DjangoTagRepository()

    @extend_schema(
        summary="Untag a post",
        description="Deletes the association only; the tag itself is kept.",
        responses={204: None},
    )
    def delete(
        self, request: Request, post_id: str, name: str, *args: Any, **kwargs: Any
    ) -> Response:
        async def untag_post() -> None:
            post = await resolvers.resolve_post(post_id, posts=self.posts)
            tag = await resolvers.resolve_tag(name, tags=self.tags)
            await tagging.remove_tag(tag, post, tags=self.tags)

        async_to_sync(untag_post)()
        return Response(status=status.HTTP_204_NO_CONTENT)
