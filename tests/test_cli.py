"""Tests for the command-line interface."""

from __future__ import annotations

import json
import logging

import pytest
from click.testing import CliRunner

from alarmfeed import cli
from alarmfeed.core.config import Config
from alarmfeed.core.errors import ConfigError, FetchError
from alarmfeed.core.models import RawFeedEntry

ENTRIES = [
    RawFeedEntry(
        guid="ep-1",
        title="PUP 1",
        pub_date="Mon, 08 Jan 2024 12:00:00 +0000",
        enclosure_url="https://example.com/pup_1.mp3",
        itunes_duration="25:00",
    ),
    RawFeedEntry(
        guid="ep-2",
        title="Alarm",
        pub_date="Mon, 15 Jan 2024 12:00:00 +0000",
        enclosure_url="https://example.com/alarm-bm.mp3",
    ),
]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def log_levels(config: Config, monkeypatch: pytest.MonkeyPatch) -> list[int]:
    """Use the test config and record the logging level the CLI selects."""
    levels: list[int] = []
    monkeypatch.setattr(cli, "load_config", lambda: config)
    monkeypatch.setattr(cli, "configure_logging", levels.append)
    return levels


@pytest.fixture
def feed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "alarmfeed.core.handler.fetch_feed",
        lambda url, timeout, client=None: list(ENTRIES),
    )


class TestClassifyCommand:
    def test_pup(self, runner: CliRunner, log_levels: list[int]) -> None:
        result = runner.invoke(cli.main, ["classify", "pup_123.mp3"])

        assert result.exit_code == 0
        assert "showType: punaUstaPoezije" in result.output
        assert "withMusic: false" in result.output

    def test_default_with_title(self, runner: CliRunner, log_levels: list[int]) -> None:
        result = runner.invoke(cli.main, ["classify", "randomfile.mp3", "--title", "Random"])

        assert result.exit_code == 0
        assert "showType: alarmSaDaskomIMladjom" in result.output
        assert "withMusic: true" in result.output

    def test_url(self, runner: CliRunner, log_levels: list[int]) -> None:
        result = runner.invoke(
            cli.main, ["classify", "https://example.com/media/episode-bm.mp3"]
        )

        assert "showType: alarmSaDaskomIMladjom" in result.output
        assert "withMusic: false" in result.output


class TestEpisodesCommand:
    def test_json(self, runner: CliRunner, log_levels: list[int], feed: None) -> None:
        result = runner.invoke(cli.main, ["episodes", "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["totalItems"] == 2
        assert [p["id"] for p in payload["podcasts"]] == ["ep-1", "ep-2"]

    def test_show_filter(self, runner: CliRunner, log_levels: list[int], feed: None) -> None:
        result = runner.invoke(cli.main, ["episodes", "--json", "--show", "punaUstaPoezije"])

        assert [p["id"] for p in json.loads(result.output)["podcasts"]] == ["ep-1"]

    def test_date_before(self, runner: CliRunner, log_levels: list[int], feed: None) -> None:
        result = runner.invoke(
            cli.main, ["episodes", "--json", "--date", "2024-01-10", "--before"]
        )

        assert [p["id"] for p in json.loads(result.output)["podcasts"]] == ["ep-1"]

    def test_date_after(self, runner: CliRunner, log_levels: list[int], feed: None) -> None:
        result = runner.invoke(cli.main, ["episodes", "--json", "--date", "2024-01-10"])

        assert [p["id"] for p in json.loads(result.output)["podcasts"]] == ["ep-2"]

    def test_table(self, runner: CliRunner, log_levels: list[int], feed: None) -> None:
        result = runner.invoke(cli.main, ["episodes"])

        assert result.exit_code == 0
        assert "PUP 1" in result.output
        assert "Page 1 of 1 (2 podcasts)" in result.output

    def test_empty_page(self, runner: CliRunner, log_levels: list[int], feed: None) -> None:
        result = runner.invoke(cli.main, ["episodes", "--page", "3"])

        assert result.exit_code == 0
        assert "No podcasts found." in result.output

    def test_unknown_show_rejected(self, runner: CliRunner, log_levels: list[int]) -> None:
        result = runner.invoke(cli.main, ["episodes", "--show", "nepostojeci"])

        assert result.exit_code == 2

    def test_invalid_date(self, runner: CliRunner, log_levels: list[int], feed: None) -> None:
        result = runner.invoke(cli.main, ["episodes", "--date", "not-a-date"])

        assert result.exit_code == 1
        assert "Error: Invalid date format" in result.output

    def test_fetch_failure(
        self,
        runner: CliRunner,
        log_levels: list[int],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        def failing_fetch(url, timeout, client=None):
            raise FetchError("unreachable")

        monkeypatch.setattr("alarmfeed.core.handler.fetch_feed", failing_fetch)

        result = runner.invoke(cli.main, ["episodes"])

        assert result.exit_code == 1
        assert "Error: Error fetching podcast feed" in result.output


class TestServeCommand:
    def test_passes_address(
        self,
        runner: CliRunner,
        log_levels: list[int],
        config: Config,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        calls = []
        monkeypatch.setattr(
            "alarmfeed.server.serve",
            lambda config, host=None, port=None: calls.append((config, host, port)),
        )

        result = runner.invoke(cli.main, ["serve", "--host", "0.0.0.0", "--port", "9000"])

        assert result.exit_code == 0
        assert calls == [(config, "0.0.0.0", 9000)]


class TestGroup:
    def test_log_level_from_config(self, runner: CliRunner, log_levels: list[int]) -> None:
        runner.invoke(cli.main, ["classify", "x.mp3"])

        assert log_levels == [logging.INFO]

    def test_verbose(self, runner: CliRunner, log_levels: list[int]) -> None:
        runner.invoke(cli.main, ["--verbose", "classify", "x.mp3"])

        assert log_levels == [logging.DEBUG]

    def test_config_error(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        def broken_config():
            raise ConfigError("Invalid TOML in config file")

        monkeypatch.setattr(cli, "load_config", broken_config)

        result = runner.invoke(cli.main, ["classify", "x.mp3"])

        assert result.exit_code == 1
        assert "Error: Invalid TOML" in result.output
