"""Mapping of raw feed entries to podcast records."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

from alarmfeed.core.errors import MappingError
from alarmfeed.core.models import PodcastRecord, RawFeedEntry
from alarmfeed.services.classifier import classify_record

logger = logging.getLogger(__name__)

_LEADING_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_pub_date(date_str: str | None) -> datetime | None:
    """Parse a publication date string from the RSS feed.

    RSS feeds use RFC 2822 dates; ISO 8601 is accepted as a fallback.
    The result is normalized to UTC; dates without an offset are taken to be UTC.

    Args:
        date_str: The date string from the RSS feed.

    Returns:
        UTC datetime, or None if the string is absent, unparseable, or
        outside the representable range once converted to UTC.
    """
    if not date_str or not date_str.strip():
        return None

    try:
        parsed = parsedate_to_datetime(date_str.strip())
    except (ValueError, TypeError, IndexError):
        try:
            parsed = datetime.fromisoformat(date_str.strip().replace("Z", "+00:00"))
        except ValueError:
            return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    try:
        return parsed.astimezone(UTC)
    except OverflowError:
        # Offset pushes the instant past datetime.min or datetime.max
        return None


def parse_length(length: str | None) -> float:
    """Parse the enclosure byte length.

    The leading number of the value is used, so ``"1234 bytes"`` gives
    ``1234.0``. Missing, non-numeric and non-finite values give ``0.0``.
    """
    if not length:
        return 0.0
    match = _LEADING_FLOAT_RE.match(length)
    if match is None:
        return 0.0
    value = float(match.group(1))
    return value if math.isfinite(value) else 0.0


def pick_identifier(entry: RawFeedEntry) -> str:
    """Return the first non-empty of guid, link and title."""
    return entry.guid or entry.link or entry.title or ""


def map_entry(entry: RawFeedEntry) -> PodcastRecord:
    """Map a raw feed entry to a classified podcast record.

    Args:
        entry: The feed item.

    Returns:
        The normalized record with its show type and music flag assigned.

    Raises:
        MappingError: If any field of the entry cannot be derived.
    """
    try:
        media_url = entry.enclosure_url or ""
        duration = entry.itunes_duration or ""
        record = PodcastRecord(
            id=pick_identifier(entry),
            title=entry.title or "",
            subtitle=entry.content_snippet or "",
            timestamp=entry.pub_date or "",
            podcast_url=media_url,
            file_url=media_url,
            duration=duration,
            itunes_duration=duration,
            length_in_bytes=parse_length(entry.enclosure_length),
            created_date=parse_pub_date(entry.pub_date),
        )
        return classify_record(record)
    except Exception as e:
        raise MappingError(f"Cannot map feed entry {entry.guid or entry.title!r}: {e}") from e


def map_entries(entries: Iterable[RawFeedEntry]) -> list[PodcastRecord]:
    """Map every entry, dropping the ones that fail.

    Feed order is preserved. A failing entry is logged and left out of the
    result so that one malformed item does not affect the others.
    """
    records: list[PodcastRecord] = []
    for entry in entries:
        try:
            records.append(map_entry(entry))
        except MappingError as e:
            logger.warning("Dropping feed entry: %s", e)
    return records
