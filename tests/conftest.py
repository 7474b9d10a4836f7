"""Shared fixtures and fakes for the headline tracker test-suite."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Iterable

import pytest

from headline_tracker.config import ConfigLocator, ConfigRepository
from headline_tracker.engine import FeedDocument, FeedItem, RecordStore
from headline_tracker.errors import FetchError, PublishError
from headline_tracker.infra import CheckStatus, Observer
from headline_tracker.publisher import BasePublisher, PublishReceipt

FIXED_NOW = datetime(2024, 5, 20, 12, 0, 30, tzinfo=timezone.utc)


class RecordingObserver(Observer):
    """Keep every telemetry call for later assertions."""

    def __init__(self) -> None:
        self.counters: list[str] = []
        self.histograms: list[tuple[str, float]] = []
        self.checks: list[tuple[str, CheckStatus]] = []
        self.events: list[tuple[str, str]] = []

    def increment(self, name: str) -> None:
        self.counters.append(name)

    def histogram(self, name: str, value: float) -> None:
        self.histograms.append((name, value))

    def check(self, name: str, status: CheckStatus) -> None:
        self.checks.append((name, status))

    def event(self, title: str, text: str) -> None:
        self.events.append((title, text))

    def last_histogram(self, name: str) -> float | None:
        values = [value for metric, value in self.histograms if metric == name]
        return values[-1] if values else None


class StubFeedSource:
    """Serve canned documents per address; an exception value is raised instead."""

    def __init__(self, documents: dict[str, FeedDocument | Exception] | None = None) -> None:
        self.documents: dict[str, FeedDocument | Exception] = dict(documents or {})
        self.calls: list[str] = []

    def fetch(self, address: str) -> FeedDocument:
        self.calls.append(address)
        outcome = self.documents.get(address)
        if outcome is None:
            raise FetchError(address, "not found")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class StubPublisher(BasePublisher):
    """Collect payloads; fail for payloads containing any of ``fail_on``."""

    def __init__(self, fail_on: Iterable[str] = ()) -> None:
        self.fail_on = tuple(fail_on)
        self.sent: list[str] = []
        self.attempts: list[str] = []

    def publish(self, text: str) -> PublishReceipt:
        self.attempts.append(text)
        if any(marker in text for marker in self.fail_on):
            raise PublishError(187, "Status is a duplicate.")
        self.sent.append(text)
        return PublishReceipt(text=text, reference=str(len(self.sent)))


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def store() -> RecordStore:
    return RecordStore()


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def make_item() -> Callable[..., FeedItem]:
    def _builder(identifier: str = "a1", title: str = "Old", **overrides: Any) -> FeedItem:
        overrides.setdefault("published_at", FIXED_NOW)
        return FeedItem(identifier=identifier, title=title, **overrides)

    return _builder


@pytest.fixture
def make_document(make_item) -> Callable[..., FeedDocument]:
    def _builder(title: str, *items: tuple[str, str]) -> FeedDocument:
        return FeedDocument(
            title=title,
            items=[make_item(identifier, headline) for identifier, headline in items],
        )

    return _builder


@pytest.fixture
def temp_config_repository(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> ConfigRepository:
    monkeypatch.setenv("HEADLINE_TRACKER_HOME", str(tmp_path))
    for name in (
        "CONSUMER_KEY",
        "CONSUMER_SECRET",
        "ACCESS_TOKEN",
        "ACCESS_TOKEN_SECRET",
        "TELEGRAM_BOT_TOKEN",
        "TELEGRAM_CHAT_ID",
    ):
        monkeypatch.delenv(name, raising=False)
    return ConfigRepository(ConfigLocator(project_root=tmp_path))


@pytest.fixture
def feed_source() -> StubFeedSource:
    return StubFeedSource()


@pytest.fixture
def publisher() -> StubPublisher:
    return StubPublisher()
