"""Data models for alarmfeed."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


class ShowType(StrEnum):
    """Show categories of the Alarm sa Daskom i Mladjom feed."""

    ALARM_SA_DASKOM_I_MLADJOM = "alarmSaDaskomIMladjom"
    LJUDI_IZ_PODZEMLJA = "ljudiIzPodzemlja"
    NA_IVICI_OFSAJDA = "naIviciOfsajda"
    RASTROJAVANJE = "rastrojavanje"
    VECERNJA_SKOLA_ROKENROLA = "vecernjaSkolaRokenrola"
    SPORTSKI_POZDRAV = "sportskiPozdrav"
    TOPLE_LJUCKE_PRICE = "topleLjuckePrice"
    MOZEMO_SAMO_DA_SE_SLIKAMO = "mozemoSamoDaSeSlikamo"
    PUNA_USTA_POEZIJE = "punaUstaPoezije"
    UNUTRASNJA_EMIGRACIJA = "unutrasnjaEmigracija"


@dataclass(frozen=True)
class RawFeedEntry:
    """One item of the source RSS document, as read by the feed parser."""

    title: str | None = None
    link: str | None = None
    guid: str | None = None
    pub_date: str | None = None
    content_snippet: str | None = None
    enclosure_url: str | None = None
    enclosure_length: str | None = None
    enclosure_type: str | None = None
    itunes_duration: str | None = None


@dataclass(frozen=True)
class Classification:
    """Outcome of show classification."""

    show_type: ShowType
    with_music: bool


@dataclass
class PodcastRecord:
    """A normalized podcast episode."""

    id: str
    title: str = ""
    subtitle: str = ""
    timestamp: str = ""
    podcast_url: str = ""
    file_url: str = ""
    duration: str = ""
    itunes_duration: str = ""
    length_in_bytes: float = 0.0
    created_date: datetime | None = None
    show_type: ShowType = ShowType.ALARM_SA_DASKOM_I_MLADJOM
    with_music: bool = True
    is_favorite: bool = False
    is_downloaded: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON shape returned by the endpoint."""
        return {
            "id": self.id,
            "title": self.title,
            "subtitle": self.subtitle,
            "timestamp": self.timestamp,
            "podcastUrl": self.podcast_url,
            "duration": self.duration,
            "lengthInBytes": self.length_in_bytes,
            "itunesDuration": self.itunes_duration,
            "fileUrl": self.file_url,
            "isFavorite": self.is_favorite,
            "isDownloaded": self.is_downloaded,
            "withMusic": self.with_music,
            "showType": str(self.show_type),
            "createdDate": format_datetime(self.created_date),
        }


@dataclass
class PodcastPage:
    """One page of podcast records plus page-count metadata."""

    page: int
    page_size: int
    total_items: int
    podcasts: list[PodcastRecord] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        """Number of pages needed to hold every item."""
        return math.ceil(self.total_items / self.page_size)

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "pageSize": self.page_size,
            "totalItems": self.total_items,
            "totalPages": self.total_pages,
            "podcasts": [podcast.to_dict() for podcast in self.podcasts],
        }


def format_datetime(value: datetime | None) -> str | None:
    """Format a datetime as ISO 8601 UTC with milliseconds and a ``Z`` suffix.

    Naive datetimes are taken to be UTC. ``None`` stays ``None``.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
