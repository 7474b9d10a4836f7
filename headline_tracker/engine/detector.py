"""Headline change detection against the record store."""

from __future__ import annotations

import structlog

from ..infra.telemetry import Observer
from ..logging_conf import component_logger
from .models import ChangeEvent, Detection, FeedItem, Outcome, TrackedArticle
from .store import RecordStore


class ChangeDetector:
    """Classify a fetched item as new, stale or changed and update the store.

    Titles are compared verbatim: whitespace differences count as a change.
    """

    def __init__(
        self,
        store: RecordStore,
        observer: Observer,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.store = store
        self.observer = observer
        self.logger = logger or component_logger("detector")

    def process(self, item: FeedItem, category: str) -> Detection:
        fresh = TrackedArticle.from_item(item, category)
        with self.store.locked():
            existing = self.store.find(item.identifier, category)
            if existing is None:
                self.store.insert(fresh)
                detection = Detection(Outcome.NEW)
            elif existing.title == item.title:
                detection = Detection(Outcome.STALE)
            else:
                self.store.replace(existing, fresh)
                detection = Detection(
                    Outcome.CHANGED,
                    ChangeEvent(
                        category=category,
                        old_title=existing.title,
                        new_title=item.title,
                        identifier=item.identifier,
                    ),
                )

        if detection.outcome is Outcome.NEW:
            self.observer.increment("article_new")
        elif detection.outcome is Outcome.STALE:
            self.observer.increment("article_stale")
        else:
            self.observer.increment("article_changed")
            self.logger.info(
                "title_changed",
                category=category,
                identifier=item.identifier,
                old_title=detection.event.old_title,
                new_title=detection.event.new_title,
            )
        return detection


__all__ = ["ChangeDetector"]
