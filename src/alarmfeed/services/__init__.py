"""Service modules for alarmfeed."""

from alarmfeed.services.classifier import (
    RULES,
    ClassificationRule,
    classify,
    classify_record,
    media_filename,
)
from alarmfeed.services.feed import fetch_feed, parse_feed_content
from alarmfeed.services.mapper import map_entries, map_entry
from alarmfeed.services.paginate import PAGE_SIZE, paginate
from alarmfeed.services.query import FeedQuery, filter_records, parse_query

__all__ = [
    "PAGE_SIZE",
    "RULES",
    "ClassificationRule",
    "FeedQuery",
    "classify",
    "classify_record",
    "fetch_feed",
    "filter_records",
    "map_entries",
    "map_entry",
    "media_filename",
    "paginate",
    "parse_feed_content",
    "parse_query",
]
