"""
Pagination arithmetic shared by every listing view.

The calculator is free of I/O: the orchestrators compute the
offset up front, issue their queries, and only then feed the total count
back in to obtain the page count.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qsl, urlencode

PAGE_PARAMETER = "page"

# (page - 1) * page_size must fit a signed 64-bit OFFSET for page sizes up to 10**9.
MAX_PAGE = 1_000_000_000


@dataclass(frozen=True)
class PaginationInformation:
    """
    Per-request pagination state handed to presenters.

    Attributes:
        current_page: The requested page, 1-based. Never clamped.
        total_pages: ``ceil(total_items / page_size)``; 0 when nothing matched.
        offset: Number of rows to skip for the requested page.
        page_size: Rows per page.
        current_query: The raw query string of the request, if any.
    """

    current_page: int
    total_pages: int
    offset: int
    page_size: int
    current_query: Optional[str] = None

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def query_for_page(self, page: int) -> str:
        """Return the current query string with the page parameter replaced."""
        params = [
            (key, value)
            for key, value in parse_qsl(self.current_query or "", keep_blank_values=True)
            if key != PAGE_PARAMETER
        ]
        params.append((PAGE_PARAMETER, str(page)))
        return urlencode(params)


def page_offset(page: int, page_size: int) -> int:
    """Offset of the first row of ``page``."""
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    return (page - 1) * page_size


def paginate(
    current_page: int,
    total_items: int,
    page_size: int,
    current_query: Optional[str] = None,
) -> PaginationInformation:
    """
    Compute pagination information for a listing.

    Pages past the end are allowed: the offset is simply beyond the data and
    the repository returns an empty page.

    Args:
        current_page: Requested page (>= 1).
        total_items: Number of matching rows (>= 0).
        page_size: Rows per page (> 0).
        current_query: Raw query string carried through for link building.

    Returns:
        A PaginationInformation value.

    Raises:
        ValueError: If any argument is out of its domain.
    """
    offset = page_offset(current_page, page_size)
    if total_items < 0:
        raise ValueError(f"total_items must be >= 0, got {total_items}")
    return PaginationInformation(
        current_page=current_page,
        total_pages=-(-total_items // page_size),
        offset=offset,
        page_size=page_size,
        current_query=current_query or None,
    )


def page_number(raw: Optional[str]) -> int:
    """
    Decode a ``page`` query parameter, falling back to the first page.

    Only plain ASCII digits are accepted, and pages above ``MAX_PAGE``
    fall back as well so the offset always fits the database.
    """
    if raw is None or not (raw.isascii() and raw.isdigit()):
        return 1
    if len(raw) > len(str(MAX_PAGE)):
        return 1
    page = int(raw)
    return page if 1 <= page <= MAX_PAGE else 1
