"""Offset-based pagination of podcast records."""

from __future__ import annotations

from collections.abc import Sequence

from alarmfeed.core.models import PodcastPage, PodcastRecord

PAGE_SIZE = 100


def page_bounds(page: int, page_size: int = PAGE_SIZE) -> tuple[int, int]:
    """Return the ``[start, end)`` offsets of a 1-based page."""
    start = (page - 1) * page_size
    return start, start + page_size


def paginate(
    records: Sequence[PodcastRecord],
    page: int = 1,
    page_size: int = PAGE_SIZE,
) -> PodcastPage:
    """Slice one page out of ``records``.

    Args:
        records: Every record matching the request.
        page: 1-based page number; values below 1 are treated as 1.
        page_size: Number of records per page (default: 100).

    Returns:
        The page with its records and page-count metadata. A page past the
        end holds no records.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    page = max(page, 1)
    start, end = page_bounds(page, page_size)
    return PodcastPage(
        page=page,
        page_size=page_size,
        total_items=len(records),
        podcasts=list(records[start:end]),
    )
