"""
repositories/ - Data Access Layer
==================================
Protocols describing what the services need from storage, plus the Django
ORM adapters used in production and the in-memory adapters used by tests.
"""

from .base import PostRepository, TagRepository, UserRepository, index_counts, require_id
from .memory import (
    InMemoryPostRepository,
    InMemoryStore,
    InMemoryTagRepository,
    InMemoryUserRepository,
)
from .orm import DjangoPostRepository, DjangoTagRepository, DjangoUserRepository

__all__ = [
    "PostRepository",
    "TagRepository",
    "UserRepository",
    "index_counts",
    "require_id",
    "InMemoryStore",
    "InMemoryPostRepository",
    "InMemoryTagRepository",
    "InMemoryUserRepository",
    "DjangoPostRepository",
    "DjangoTagRepository",
    "DjangoUserRepository",
]
