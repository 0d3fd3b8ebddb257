"""RSS feed fetcher for the podcast endpoint.

Retrieves the podcast RSS feed over HTTP and reads its items into
``RawFeedEntry`` objects. XML parsing is delegated to feedparser.
"""

from __future__ import annotations

import html
import logging
import re
from typing import Any

import feedparser
import httpx

from alarmfeed.core.errors import FetchError
from alarmfeed.core.models import RawFeedEntry

logger = logging.getLogger(__name__)

# Default timeout for feed requests (in seconds)
DEFAULT_TIMEOUT = 30.0

_TAG_RE = re.compile(r"<[^>]*>")


def _text(value: Any) -> str | None:
    """Return ``value`` as a string, or None when it is missing or empty."""
    if value is None:
        return None
    value = str(value)
    return value if value else None


def _make_snippet(markup: str | None) -> str | None:
    """Strip HTML markup from item content, leaving plain text."""
    if not markup:
        return None
    return html.unescape(_TAG_RE.sub("", markup)).strip()


def _extract_content(entry: Any) -> str | None:
    """Pick the richest item body: ``content:encoded`` first, then the description."""
    for content in entry.get("content", []) or []:
        value = content.get("value")
        if value:
            return value
    return entry.get("summary") or entry.get("description")


def _extract_enclosure(entry: Any) -> dict[str, Any]:
    """Return the first enclosure of the entry, or an empty dict."""
    enclosures = entry.get("enclosures", []) or []
    for enclosure in enclosures:
        if enclosure.get("href") or enclosure.get("url"):
            return enclosure
    return enclosures[0] if enclosures else {}


def _to_raw_entry(entry: Any) -> RawFeedEntry:
    """Convert a feedparser entry into a RawFeedEntry."""
    enclosure = _extract_enclosure(entry)
    return RawFeedEntry(
        title=_text(entry.get("title")),
        link=_text(entry.get("link")),
        guid=_text(entry.get("id")),
        pub_date=_text(entry.get("published")),
        content_snippet=_make_snippet(_extract_content(entry)),
        enclosure_url=_text(enclosure.get("href") or enclosure.get("url")),
        enclosure_length=_text(enclosure.get("length")),
        enclosure_type=_text(enclosure.get("type")),
        itunes_duration=_text(entry.get("itunes_duration")),
    )


def parse_feed_content(content: bytes | str) -> list[RawFeedEntry]:
    """Parse an RSS document into raw feed entries.

    Args:
        content: The RSS document body.

    Returns:
        The feed items in document order.

    Raises:
        FetchError: If the document is malformed and yields no entries.
    """
    feed = feedparser.parse(content)

    # feedparser sets bozo for feeds that are only slightly malformed,
    # so only give up when nothing could be read.
    if feed.bozo and not feed.entries:
        raise FetchError(f"Invalid RSS feed: {feed.bozo_exception}")

    return [_to_raw_entry(entry) for entry in feed.entries]


def fetch_feed(
    feed_url: str,
    timeout: float = DEFAULT_TIMEOUT,
    *,
    client: httpx.Client | None = None,
) -> list[RawFeedEntry]:
    """Fetch the podcast RSS feed and read its entries.

    Args:
        feed_url: URL of the podcast RSS feed.
        timeout: Request timeout in seconds (default: 30.0).
        client: Optional httpx client to issue the request with.

    Returns:
        List of RawFeedEntry objects in feed order.

    Raises:
        FetchError: If the feed is unreachable, returns an error status,
            or cannot be parsed.
    """
    if not feed_url or not feed_url.strip():
        raise FetchError("Feed URL cannot be empty")

    feed_url = feed_url.strip()
    logger.debug("Fetching podcast feed from %s", feed_url)

    should_close_client = client is None
    if client is None:
        client = httpx.Client(timeout=timeout, follow_redirects=True)

    try:
        response = client.get(feed_url)
        response.raise_for_status()
        content = response.content

    except httpx.TimeoutException as e:
        raise FetchError(f"RSS feed request timed out after {timeout} seconds") from e

    except httpx.HTTPStatusError as e:
        raise FetchError(f"RSS feed returned error status {e.response.status_code}") from e

    except httpx.RequestError as e:
        raise FetchError(f"Failed to connect to RSS feed: {e}") from e

    finally:
        if should_close_client:
            client.close()

    entries = parse_feed_content(content)
    logger.info("Fetched %d entries from %s", len(entries), feed_url)
    return entries
