"""Pydantic models describing the tracker configuration."""

from __future__ import annotations

from datetime import timedelta
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_FEED_ROOT = "http://feeds.nos.nl/"
DEFAULT_FEED_NAMES = (
    "nosnieuwsbinnenland",
    "nosnieuwsalgemeen",
    "nosnieuwsbuitenland",
    "nosnieuwspolitiek",
    "nosnieuwseconomie",
    "nosnieuwscultuurenmedia",
    "nosnieuwstech",
    "nosnieuwskoningshuis",
)


class FeedConfig(BaseModel):
    """One feed to poll; ``url`` overrides ``feed_root + name``."""

    name: str
    url: str | None = None

    @field_validator("name")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Feed name cannot be empty")
        return value

    def resolved_url(self, feed_root: str) -> str:
        if self.url:
            return self.url
        return feed_root + self.name


def _default_feeds() -> list[FeedConfig]:
    return [FeedConfig(name=name) for name in DEFAULT_FEED_NAMES]


class ScheduleSettings(BaseModel):
    """Cadence of the three periodic jobs."""

    poll_interval_seconds: float = 30
    sweep_interval_hours: float = 24
    heartbeat_interval_seconds: float = 60
    poll_on_start: bool = True

    @model_validator(mode="after")
    def _validate_positive(self) -> "ScheduleSettings":
        if self.poll_interval_seconds <= 0:
            raise ValueError("poll_interval_seconds must be > 0")
        if self.sweep_interval_hours <= 0:
            raise ValueError("sweep_interval_hours must be > 0")
        if self.heartbeat_interval_seconds <= 0:
            raise ValueError("heartbeat_interval_seconds must be > 0")
        return self


class FetchSettings(BaseModel):
    timeout_seconds: float = 15.0
    user_agent: str = "headline-tracker/1.0 (+https://feeds.nos.nl/)"
    workers: int = 4

    @model_validator(mode="after")
    def _validate(self) -> "FetchSettings":
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")
        if self.workers < 1:
            raise ValueError("workers must be >= 1")
        return self


class PublisherConfig(BaseModel):
    """Where change notifications go. Secrets normally come from the environment."""

    kind: Literal["log", "twitter", "telegram"] = "log"
    max_length: int = 280
    consumer_key: str = ""
    consumer_secret: str = ""
    access_token: str = ""
    access_token_secret: str = ""
    bot_token: str = ""
    chat_id: str = ""

    def missing_credentials(self) -> list[str]:
        if self.kind == "twitter":
            required = ("consumer_key", "consumer_secret", "access_token", "access_token_secret")
        elif self.kind == "telegram":
            required = ("bot_token", "chat_id")
        else:
            required = ()
        return [name for name in required if not getattr(self, name)]


class TelemetryConfig(BaseModel):
    kind: Literal["log", "statsd"] = "log"
    host: str = "localhost"
    port: int = 8125
    namespace: str = "nosedits"


class AppConfig(BaseModel):
    """Top-level configuration loaded once at startup."""

    feed_root: str = DEFAULT_FEED_ROOT
    feeds: list[FeedConfig] = Field(default_factory=_default_feeds)
    boilerplate_tokens: list[str] = Field(default_factory=lambda: ["NOS.nl", "NOS", "nieuws"])
    retention_hours: float = 48
    schedule: ScheduleSettings = Field(default_factory=ScheduleSettings)
    fetch: FetchSettings = Field(default_factory=FetchSettings)
    publisher: PublisherConfig = Field(default_factory=PublisherConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

    @model_validator(mode="after")
    def _validate(self) -> "AppConfig":
        if self.retention_hours <= 0:
            raise ValueError("retention_hours must be > 0")
        seen: set[str] = set()
        for feed in self.feeds:
            if feed.name in seen:
                raise ValueError(f"Duplicate feed name: {feed.name}")
            seen.add(feed.name)
        return self

    @property
    def retention(self) -> timedelta:
        return timedelta(hours=self.retention_hours)

    def feed_urls(self) -> list[tuple[FeedConfig, str]]:
        return [(feed, feed.resolved_url(self.feed_root)) for feed in self.feeds]


__all__ = [
    "AppConfig",
    "DEFAULT_FEED_NAMES",
    "DEFAULT_FEED_ROOT",
    "FeedConfig",
    "FetchSettings",
    "PublisherConfig",
    "ScheduleSettings",
    "TelemetryConfig",
]
