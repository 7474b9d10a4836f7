from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from headline_tracker.config import AppConfig, ConfigLocator, ConfigRepository, FeedConfig
from headline_tracker.config.models import DEFAULT_FEED_NAMES
from headline_tracker.errors import ConfigError


def test_defaults_cover_nos_feed_set(temp_config_repository: ConfigRepository) -> None:
    config = temp_config_repository.load()
    assert [feed.name for feed in config.feeds] == list(DEFAULT_FEED_NAMES)
    assert config.feed_urls()[0][1] == "http://feeds.nos.nl/nosnieuwsbinnenland"
    assert config.schedule.poll_interval_seconds == 30
    assert config.schedule.sweep_interval_hours == 24
    assert config.schedule.heartbeat_interval_seconds == 60
    assert config.retention.total_seconds() == 48 * 3600
    assert config.publisher.kind == "log"
    assert config.telemetry.namespace == "nosedits"


def test_locator_honours_home_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HEADLINE_TRACKER_HOME", str(tmp_path))
    locator = ConfigLocator()
    assert locator.project_root == tmp_path.resolve()
    assert locator.config_path == tmp_path.resolve() / "config.yaml"
    assert locator.logs_dir == tmp_path.resolve() / "logs"


def test_yaml_file_is_loaded(temp_config_repository: ConfigRepository) -> None:
    path = temp_config_repository.locator.config_path
    path.write_text(
        yaml.safe_dump(
            {
                "feeds": [
                    {"name": "nosnieuwstech"},
                    {"name": "custom", "url": "https://example.com/rss.xml"},
                ],
                "schedule": {"poll_interval_seconds": 45},
            }
        ),
        encoding="utf-8",
    )
    config = temp_config_repository.load()
    assert config.schedule.poll_interval_seconds == 45
    assert [url for _, url in config.feed_urls()] == [
        "http://feeds.nos.nl/nosnieuwstech",
        "https://example.com/rss.xml",
    ]


def test_save_and_reload_without_secrets(temp_config_repository: ConfigRepository) -> None:
    config = AppConfig(feeds=[FeedConfig(name="nosnieuwstech")])
    config.publisher.consumer_key = "should-not-be-written"
    path = temp_config_repository.save(config)
    payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert payload["publisher"]["consumer_key"] == ""
    assert ConfigRepository(temp_config_repository.locator).load().feeds == config.feeds


def test_ensure_default_writes_once(temp_config_repository: ConfigRepository) -> None:
    path = temp_config_repository.ensure_default()
    assert path.exists()
    path.write_text("retention_hours: 12\n", encoding="utf-8")
    temp_config_repository.ensure_default()
    assert path.read_text(encoding="utf-8") == "retention_hours: 12\n"


def test_credentials_come_from_environment(
    temp_config_repository: ConfigRepository, monkeypatch: pytest.MonkeyPatch
) -> None:
    temp_config_repository.locator.config_path.write_text(
        "publisher:\n  kind: twitter\n", encoding="utf-8"
    )
    for name, value in (
        ("CONSUMER_KEY", "ck"),
        ("CONSUMER_SECRET", "cs"),
        ("ACCESS_TOKEN", "at"),
        ("ACCESS_TOKEN_SECRET", "ats"),
    ):
        monkeypatch.setenv(name, value)
    publisher = temp_config_repository.load().publisher
    assert (publisher.consumer_key, publisher.access_token_secret) == ("ck", "ats")


def test_missing_credentials_is_a_config_error(temp_config_repository: ConfigRepository) -> None:
    temp_config_repository.locator.config_path.write_text(
        "publisher:\n  kind: telegram\n", encoding="utf-8"
    )
    with pytest.raises(ConfigError, match="bot_token"):
        temp_config_repository.load()


@pytest.mark.parametrize(
    "content",
    [
        "retention_hours: 0\n",
        "schedule:\n  poll_interval_seconds: -1\n",
        "feeds:\n  - name: a\n  - name: a\n",
        "- just\n- a list\n",
        "feeds: [unclosed\n",
    ],
)
def test_invalid_configuration_raises_config_error(
    temp_config_repository: ConfigRepository, content: str
) -> None:
    temp_config_repository.locator.config_path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        temp_config_repository.load()
