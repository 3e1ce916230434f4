"""
Serializers for blog records.

These work on the typed records (not model instances), so they are plain
``Serializer`` classes with read-only fields.
"""

from rest_framework import serializers

from src.apps.blog.models import Tag


class TagSerializer(serializers.Serializer):  # type: ignore[misc]
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(read_only=True)
    url_encoded_name = serializers.CharField(read_only=True)


class AuthorSerializer(serializers.Serializer):  # type: ignore[misc]
    id = serializers.IntegerField(read_only=True)
    username = serializers.CharField(read_only=True)
    display_name = serializers.CharField(read_only=True)


class PostSerializer(serializers.Serializer):  # type: ignore[misc]
    """
    Serializer for posts in listings and on the single-post page.

    ``contents`` is included in full; presenters decide how much to render.
    """

    id = serializers.IntegerField(read_only=True)
    slug = serializers.CharField(read_only=True)
    title = serializers.CharField(read_only=True)
    contents = serializers.CharField(read_only=True)
    author_id = serializers.IntegerField(read_only=True)
    published = serializers.BooleanField(read_only=True)
    created = serializers.DateTimeField(read_only=True)
    last_edited = serializers.DateTimeField(read_only=True, allow_null=True)


class PaginationSerializer(serializers.Serializer):  # type: ignore[misc]
    current_page = serializers.IntegerField(read_only=True)
    total_pages = serializers.IntegerField(read_only=True)
    offset = serializers.IntegerField(read_only=True)
    page_size = serializers.IntegerField(read_only=True)
    current_query = serializers.CharField(read_only=True, allow_null=True)
    has_previous = serializers.BooleanField(read_only=True)
    has_next = serializers.BooleanField(read_only=True)


class TagNameSerializer(serializers.Serializer):  # type: ignore[misc]
    """Input for tagging a post. The name is kept verbatim, no trimming."""

    name = serializers.CharField(
        max_length=Tag._meta.get_field("name").max_length, trim_whitespace=False
    )
