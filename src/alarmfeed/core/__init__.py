"""Core modules for alarmfeed."""

from alarmfeed.core.config import (
    Config,
    FeedConfig,
    LoggingConfig,
    ServerConfig,
    load_config,
)
from alarmfeed.core.errors import (
    AlarmFeedError,
    ConfigError,
    FetchError,
    InvalidDateError,
    MappingError,
)
from alarmfeed.core.models import (
    Classification,
    PodcastPage,
    PodcastRecord,
    RawFeedEntry,
    ShowType,
)

__all__ = [
    "AlarmFeedError",
    "Classification",
    "Config",
    "ConfigError",
    "FeedConfig",
    "FetchError",
    "InvalidDateError",
    "LoggingConfig",
    "MappingError",
    "PodcastPage",
    "PodcastRecord",
    "RawFeedEntry",
    "ServerConfig",
    "ShowType",
    "load_config",
]
