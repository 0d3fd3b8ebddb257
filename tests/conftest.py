"""Pytest fixtures for alarmfeed tests."""

from datetime import UTC, datetime

import pytest

from alarmfeed.core.config import Config, FeedConfig
from alarmfeed.core.models import PodcastRecord, RawFeedEntry, ShowType

FEED_URL = "https://example.com/feed.xml"


@pytest.fixture
def config() -> Config:
    """Create a configuration pointing at the test feed URL."""
    return Config(feed=FeedConfig(url=FEED_URL, timeout=5.0))


@pytest.fixture
def sample_entry() -> RawFeedEntry:
    """Create a complete raw feed entry for testing."""
    return RawFeedEntry(
        title="Alarm 15.01.2024",
        link="https://example.com/episodes/1",
        guid="episode-1",
        pub_date="Mon, 15 Jan 2024 12:00:00 +0000",
        content_snippet="Jutarnji program",
        enclosure_url="https://example.com/audio/2024-01-15-bm.mp3",
        enclosure_length="1234567",
        enclosure_type="audio/mpeg",
        itunes_duration="01:02:03",
    )


def make_record(
    id: str = "id",
    show_type: ShowType = ShowType.ALARM_SA_DASKOM_I_MLADJOM,
    created_date: datetime | None = datetime(2024, 1, 15, 12, 0, tzinfo=UTC),
    **kwargs,
) -> PodcastRecord:
    """Create a PodcastRecord with sensible defaults."""
    return PodcastRecord(id=id, show_type=show_type, created_date=created_date, **kwargs)


@pytest.fixture
def sample_records() -> list[PodcastRecord]:
    """Create records across shows and dates, including one without a date."""
    return [
        make_record("a", ShowType.ALARM_SA_DASKOM_I_MLADJOM, datetime(2022, 6, 1, tzinfo=UTC)),
        make_record("b", ShowType.PUNA_USTA_POEZIJE, datetime(2022, 12, 31, 23, 59, tzinfo=UTC)),
        make_record("c", ShowType.PUNA_USTA_POEZIJE, datetime(2023, 1, 1, tzinfo=UTC)),
        make_record("d", ShowType.RASTROJAVANJE, datetime(2023, 3, 1, tzinfo=UTC)),
        make_record("e", ShowType.PUNA_USTA_POEZIJE, datetime(2024, 2, 2, tzinfo=UTC)),
        make_record("f", ShowType.PUNA_USTA_POEZIJE, None),
    ]


@pytest.fixture
def sample_rss_feed() -> str:
    """Create a sample RSS feed for testing."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:itunes="http://www.itunes.com/dtds/podcast-1.0.dtd">
  <channel>
    <title>Alarm sa Daskom i Mladjom</title>
    <description>Jutarnji program</description>
    <item>
      <title>Alarm 15.01.2024</title>
      <link>https://example.com/episodes/1</link>
      <guid isPermaLink="false">episode-1</guid>
      <pubDate>Mon, 15 Jan 2024 12:00:00 +0000</pubDate>
      <description><![CDATA[<p>Jutarnji &amp; program</p>]]></description>
      <enclosure url="https://example.com/audio/2024-01-15-bm.mp3" type="audio/mpeg" length="1000000"/>
      <itunes:duration>01:00:00</itunes:duration>
    </item>
    <item>
      <title>Puna usta poezije 12</title>
      <guid isPermaLink="false">episode-2</guid>
      <pubDate>Mon, 08 Jan 2024 12:00:00 +0000</pubDate>
      <enclosure url="https://example.com/audio/pup_12.mp3" type="audio/mpeg" length="2000000"/>
      <itunes:duration>25:00</itunes:duration>
    </item>
    <item>
      <title>Unutrasnja emigracija</title>
      <guid isPermaLink="false">episode-3</guid>
      <pubDate>Mon, 02 Jan 2023 12:00:00 +0000</pubDate>
      <enclosure url="https://example.com/audio/unutrasnja_emigracija_3.mp3" type="audio/mpeg" length="3000000"/>
    </item>
    <item>
      <title>Bez datuma</title>
      <guid isPermaLink="false">episode-4</guid>
      <enclosure url="https://example.com/audio/randomfile.mp3" type="audio/mpeg" length="400"/>
    </item>
  </channel>
</rss>"""


def build_rss_feed(count: int) -> str:
    """Create an RSS feed with ``count`` dated items."""
    items = "\n".join(
        f"""<item>
      <title>Episode {i}</title>
      <guid isPermaLink="false">ep-{i}</guid>
      <pubDate>Mon, 01 Jan 2024 00:00:00 +0000</pubDate>
      <enclosure url="https://example.com/audio/ep{i}.mp3" type="audio/mpeg" length="100"/>
    </item>"""
        for i in range(count)
    )
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Alarm sa Daskom i Mladjom</title>
    {items}
  </channel>
</rss>"""
