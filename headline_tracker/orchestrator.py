"""Poll cycle orchestration: fetch → detect → publish → report."""

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Iterable, Sequence

import structlog

from .engine import (
    ChangeDetector,
    ChangeEvent,
    FeedDocument,
    FeedSource,
    Outcome,
    RecordStore,
    ThreadPoolManager,
    derive_category,
    render_notification,
)
from .engine.text import DEFAULT_BOILERPLATE
from .errors import FetchError, PublishError
from .infra import CheckStatus, Observer
from .logging_conf import component_logger
from .publisher import BasePublisher


@dataclass(slots=True)
class CycleReport:
    """Tallies for a single poll cycle."""

    feeds_polled: int = 0
    feeds_failed: int = 0
    feeds_skipped: int = 0
    items_seen: int = 0
    new: int = 0
    stale: int = 0
    changed: int = 0
    published: int = 0
    publish_failed: int = 0
    tracked: int = 0
    categories: list[str] = field(default_factory=list)

    def as_dict(self) -> dict[str, int]:
        return {
            "feeds_polled": self.feeds_polled,
            "feeds_failed": self.feeds_failed,
            "feeds_skipped": self.feeds_skipped,
            "items_seen": self.items_seen,
            "new": self.new,
            "stale": self.stale,
            "changed": self.changed,
            "published": self.published,
            "publish_failed": self.publish_failed,
            "tracked": self.tracked,
        }


class PollCycleOrchestrator:
    """Drive one polling pass across all configured feeds.

    Fetches run concurrently when a thread pool is supplied; their results are
    consumed in configuration order, so detection and publishing stay
    deterministic. Each feed's category is computed from its own document only.
    """

    def __init__(
        self,
        store: RecordStore,
        feed_source: FeedSource,
        publisher: BasePublisher,
        observer: Observer,
        feeds: Sequence[str],
        boilerplate_tokens: Iterable[str] = DEFAULT_BOILERPLATE,
        thread_pool: ThreadPoolManager | None = None,
        detector: ChangeDetector | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.store = store
        self.feed_source = feed_source
        self.publisher = publisher
        self.observer = observer
        self.feeds = list(feeds)
        self.boilerplate_tokens = tuple(boilerplate_tokens)
        self.thread_pool = thread_pool
        self.detector = detector or ChangeDetector(store, observer)
        self.logger = logger or component_logger("orchestrator")

    # ------------------------------------------------------------------
    def run_cycle(self) -> CycleReport:
        report = CycleReport()
        for address, outcome in zip(self.feeds, self._fetch_all()):
            if isinstance(outcome, FetchError):
                self._report_fetch_failure(address, outcome)
                report.feeds_failed += 1
                continue
            report.feeds_polled += 1
            self._process_feed(address, outcome, report)

        report.tracked = self.store.count()
        self.observer.histogram("article_count", report.tracked)
        self.observer.histogram("feeditems_count", report.items_seen)
        self.logger.info("poll_cycle_finished", **report.as_dict())
        return report

    def _fetch_all(self) -> list[FeedDocument | FetchError]:
        if self.thread_pool is None:
            return [self._fetch_one(address) for address in self.feeds]
        executor = self.thread_pool.get()
        futures: list[Future[FeedDocument | FetchError]] = [
            executor.submit(self._fetch_one, address) for address in self.feeds
        ]
        return [future.result() for future in futures]

    def _fetch_one(self, address: str) -> FeedDocument | FetchError:
        try:
            return self.feed_source.fetch(address)
        except FetchError as exc:
            return exc
        except Exception as exc:  # noqa: BLE001
            return FetchError(address, f"{type(exc).__name__}: {exc}")

    def _process_feed(self, address: str, document: FeedDocument, report: CycleReport) -> None:
        category = derive_category(document.title, self.boilerplate_tokens)
        if not category:
            self.logger.warning("feed_without_category", url=address, title=document.title)
            report.feeds_skipped += 1
            return
        report.categories.append(category)
        report.items_seen += len(document.items)
        for item in document.items:
            detection = self.detector.process(item, category)
            if detection.outcome is Outcome.NEW:
                report.new += 1
            elif detection.outcome is Outcome.STALE:
                report.stale += 1
            else:
                report.changed += 1
                if self.publish(detection.event):
                    report.published += 1
                else:
                    report.publish_failed += 1

    def publish(self, event: ChangeEvent) -> bool:
        """Render and publish one change; failures are observed, never raised."""

        text = render_notification(event)
        try:
            receipt = self.publisher.publish(text)
        except PublishError as exc:
            self._report_publish_failure(event, exc)
            return False
        except Exception as exc:  # noqa: BLE001
            self._report_publish_failure(
                event, PublishError("unexpected", f"{type(exc).__name__}: {exc}")
            )
            return False
        self.observer.check("tweet_result", CheckStatus.OK)
        self.logger.info("notification_published", text=text, reference=receipt.reference)
        return True

    def _report_publish_failure(self, event: ChangeEvent, error: PublishError) -> None:
        self.logger.warning(
            "publish_failed", code=error.code, error=error.message, identifier=event.identifier
        )
        self.observer.event("Status update failed", str(error))
        self.observer.check("tweet_result", CheckStatus.WARNING)
        self.observer.increment("error_rate")

    def _report_fetch_failure(self, address: str, error: FetchError) -> None:
        self.logger.warning("feed_fetch_failed", url=address, error=error.reason)
        self.observer.event("Feed fetch failed", f"{address}: {error.reason}")
        self.observer.increment("error_rate")


class Heartbeat:
    """Liveness ping plus per-category article counts."""

    def __init__(self, store: RecordStore, observer: Observer, categories: Iterable[str]) -> None:
        self.store = store
        self.observer = observer
        self.categories = [category for category in categories if category]

    @classmethod
    def for_feed_names(
        cls,
        store: RecordStore,
        observer: Observer,
        feed_names: Iterable[str],
        boilerplate_tokens: Iterable[str] = DEFAULT_BOILERPLATE,
    ) -> "Heartbeat":
        tokens = tuple(boilerplate_tokens)
        categories = [derive_category(name, tokens) for name in feed_names]
        return cls(store, observer, dict.fromkeys(categories))

    def beat(self) -> dict[str, int]:
        self.observer.check("service.up", CheckStatus.OK)
        counts = {category: self.store.count_by_category(category) for category in self.categories}
        for category, count in counts.items():
            self.observer.histogram(category, count)
        return counts


__all__ = ["CycleReport", "Heartbeat", "PollCycleOrchestrator"]
