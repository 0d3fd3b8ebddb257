"""Request handling for the podcast endpoint.

Runs the request flow: fetch -> map -> classify -> filter -> paginate,
and turns the outcome into a status, a body and a content type.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass

import httpx

from alarmfeed.core.config import Config
from alarmfeed.core.errors import FetchError, InvalidDateError
from alarmfeed.core.models import PodcastPage
from alarmfeed.services.feed import fetch_feed
from alarmfeed.services.mapper import map_entries
from alarmfeed.services.paginate import paginate
from alarmfeed.services.query import FeedQuery, filter_records, parse_query

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"

FETCH_ERROR_MESSAGE = "Error fetching podcast feed"


@dataclass(frozen=True)
class FeedResponse:
    """An HTTP response produced by the handler."""

    status: int
    body: str
    content_type: str

    @property
    def ok(self) -> bool:
        return self.status == 200


def json_response(status: int, payload: object) -> FeedResponse:
    return FeedResponse(
        status=status,
        body=json.dumps(payload, ensure_ascii=False, allow_nan=False),
        content_type=JSON_CONTENT_TYPE,
    )


def error_response() -> FeedResponse:
    return FeedResponse(status=500, body=FETCH_ERROR_MESSAGE, content_type=TEXT_CONTENT_TYPE)


def build_page(
    query: FeedQuery,
    config: Config,
    *,
    client: httpx.Client | None = None,
) -> PodcastPage:
    """Fetch the feed and produce the page of records matching ``query``.

    Raises:
        FetchError: If the feed cannot be fetched or parsed.
    """
    entries = fetch_feed(config.feed.url, timeout=config.feed.timeout, client=client)
    records = map_entries(entries)
    matching = filter_records(records, query)
    logger.debug(
        "%d of %d records match (show=%s, date=%s, is_before=%s)",
        len(matching),
        len(records),
        query.show,
        query.date,
        query.is_before,
    )
    return paginate(matching, query.page)


def handle_request(
    params: Mapping[str, object],
    config: Config,
    *,
    client: httpx.Client | None = None,
) -> FeedResponse:
    """Serve one podcast request.

    Args:
        params: Query parameters (``page``, ``date``, ``is_before``, ``show``).
        config: Application configuration; supplies the feed URL.
        client: Optional httpx client used for the feed request.

    Returns:
        200 with the JSON page, 400 with a JSON error for an invalid
        ``date``, or 500 with a plain-text message for any other failure.
    """
    try:
        query = parse_query(params)
    except InvalidDateError as e:
        logger.info("Rejected request with invalid date %r", params.get("date"))
        return json_response(400, {"error": str(e)})

    try:
        page = build_page(query, config, client=client)
        return json_response(200, page.to_dict())
    except FetchError:
        logger.exception("Error fetching RSS feed")
        return error_response()
    except Exception:
        logger.exception("Unexpected error while building podcast page")
        return error_response()
