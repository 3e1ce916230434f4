"""
Typed records for the content core.

These are what repositories return and what the orchestrator and presenters
work with; they carry no ORM state. ``id`` is None until the record has been
persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from urllib.parse import quote

from django.utils import timezone

# Characters allowed unescaped in a URL host component (RFC 3986).
_HOST_SAFE_CHARACTERS = "!$&'()*+,;=:[]"


@dataclass
class UserRecord:
    """
    A blog author.

    Attributes:
        username: Unique login/handle, used in author page URLs.
        first_name: Optional given name.
        last_name: Optional family name.
        email: Optional contact address.
        id: Primary key (None for new records).
    """

    username: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    id: Optional[int] = None

    @property
    def display_name(self) -> str:
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name or self.username


@dataclass
class TagRecord:
    """A tag. ``name`` is compared exactly, without case folding."""

    name: str
    id: Optional[int] = None

    @property
    def url_encoded_name(self) -> str:
        """Percent-encoded ``name``, safe to embed in a URL path."""
        return quote(self.name, safe=_HOST_SAFE_CHARACTERS)


@dataclass
class PostRecord:
    """
    A blog post.

    Attributes:
        title: Headline.
        contents: Body text.
        author_id: Primary key of the authoring user.
        slug: Unique URL key; generated from the title on save when empty.
        published: Drafts are False and never reach public listings.
        created: Creation/publish timestamp, the recency ordering key.
        last_edited: Set by storage on every save.
        id: Primary key (None for new records).
    """

    title: str
    contents: str
    author_id: int
    slug: str = ""
    published: bool = False
    created: datetime = field(default_factory=timezone.now)
    last_edited: Optional[datetime] = None
    id: Optional[int] = None

    def __str__(self) -> str:
        state = "published" if self.published else "draft"
        return f"{self.title} ({state})"
