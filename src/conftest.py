"""
Pytest configuration and global fixtures.

Defines common fixtures and settings for the entire test suite.
"""

import os

import django
from django.conf import settings

# Configure Django settings before any Django imports
if not settings.configured:
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "src.config.settings.test")
    django.setup()

# Now safe to import Django and DRF components
from datetime import timedelta
from typing import Any, Callable

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from faker import Faker
from rest_framework.test import APIClient

from src.apps.blog.models import Post
from src.apps.blog.repositories import (
    InMemoryPostRepository,
    InMemoryStore,
    InMemoryTagRepository,
    InMemoryUserRepository,
)

User = get_user_model()
fake = Faker()


@pytest.fixture
def user() -> Any:
    """Create a test user."""
    return User.objects.create_user(  # type: ignore[attr-defined]
        username="testuser",
        email="test@example.com",
        password="testpass123",
        first_name="Test",
        last_name="Author",
    )


@pytest.fixture
def api_client() -> APIClient:
    """DRF API test client."""
    return APIClient()


@pytest.fixture
def authenticated_api_client(api_client: APIClient, user: Any) -> APIClient:
    """Authenticated DRF API test client."""
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def make_post(user: Any) -> Callable[..., Post]:
    """
    Factory creating stored posts.

    Each call creates a post one minute older than the previous one, so
    recency ordering is deterministic: the first post created is the newest.
    """
    base_time = timezone.now()
    created_count = 0

    def _make_post(published: bool = True, author: Any = None, **fields: Any) -> Post:
        nonlocal created_count
        created_count += 1
        fields.setdefault("title", fake.sentence(nb_words=4))
        fields.setdefault("contents", fake.paragraph())
        fields.setdefault("created", base_time - timedelta(minutes=created_count))
        return Post.objects.create(author=author or user, published=published, **fields)

    return _make_post


@pytest.fixture
def memory_store() -> InMemoryStore:
    """Empty shared store for the in-memory repositories."""
    return InMemoryStore()


@pytest.fixture
def memory_posts(memory_store: InMemoryStore) -> InMemoryPostRepository:
    return InMemoryPostRepository(memory_store)


@pytest.fixture
def memory_tags(memory_store: InMemoryStore) -> InMemoryTagRepository:
    return InMemoryTagRepository(memory_store)


@pytest.fixture
def memory_users(memory_store: InMemoryStore) -> InMemoryUserRepository:
    return InMemoryUserRepository(memory_store)


@pytest.fixture(autouse=True)
def enable_db_access_for_all_tests(db: Any) -> None:
    """Enable database access for all tests by default."""
    pass
