"""Query parameter parsing and record filtering."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime

from alarmfeed.core.errors import InvalidDateError
from alarmfeed.core.models import PodcastRecord

INVALID_DATE_MESSAGE = "Invalid date format. Please use a valid ISO 8601 date format."

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class FeedQuery:
    """Parsed query parameters of a podcast request.

    Attributes:
        page: 1-based page number.
        date: Date bound, or None when no date filtering is requested.
        is_before: Keep records strictly before ``date`` when True,
            strictly after it otherwise.
        show: Show type to keep, or None for every show.
    """

    page: int = 1
    date: datetime | None = None
    is_before: bool = False
    show: str | None = None


def _first(params: Mapping[str, object], name: str) -> str | None:
    """Return a single query value; repeated parameters use the first value."""
    value = params.get(name)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return None
    return str(value)


def parse_page(value: str | None) -> int:
    """Parse the page number, defaulting to 1.

    The leading integer of the value is used. Missing, non-numeric and
    non-positive values give 1.
    """
    if not value:
        return 1
    match = _LEADING_INT_RE.match(value)
    if match is None:
        return 1
    page = int(match.group(1))
    return page if page >= 1 else 1


def parse_date(value: str) -> datetime:
    """Parse an ISO 8601 date or date-time into an aware datetime.

    Values without an offset are taken to be UTC.

    Raises:
        InvalidDateError: If the value is not valid ISO 8601.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError as e:
        raise InvalidDateError(INVALID_DATE_MESSAGE) from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_query(params: Mapping[str, object]) -> FeedQuery:
    """Build a FeedQuery from request query parameters.

    Args:
        params: Query parameters; values may be strings or lists of strings.

    Returns:
        The parsed query.

    Raises:
        InvalidDateError: If ``date`` is present but not valid ISO 8601.
    """
    date_value = _first(params, "date")
    show = _first(params, "show")
    return FeedQuery(
        page=parse_page(_first(params, "page")),
        date=parse_date(date_value) if date_value else None,
        is_before=_first(params, "is_before") == "true",
        show=show or None,
    )


def filter_records(
    records: Iterable[PodcastRecord],
    query: FeedQuery,
) -> list[PodcastRecord]:
    """Apply the show and date filters of ``query`` to ``records``.

    Records without a creation date never pass an active date filter.
    """
    result = list(records)

    if query.show is not None:
        result = [record for record in result if record.show_type == query.show]

    if query.date is not None:
        bound = query.date
        if query.is_before:
            result = [
                record for record in result
                if record.created_date is not None and record.created_date < bound
            ]
        else:
            result = [
                record for record in result
                if record.created_date is not None and record.created_date > bound
            ]

    return result
