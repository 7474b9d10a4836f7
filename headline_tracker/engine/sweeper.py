"""Time-based eviction of tracked articles."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

import structlog

from ..infra.telemetry import Observer
from ..logging_conf import component_logger
from .store import RecordStore

DEFAULT_RETENTION = timedelta(hours=48)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _to_minute(value: datetime) -> datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).replace(second=0, microsecond=0)


@dataclass(frozen=True, slots=True)
class SweepResult:
    removed: int
    total: int

    @property
    def percentage(self) -> int:
        """Share of the pre-sweep total that was removed, floored; 0 for an empty store."""

        if self.total == 0:
            return 0
        return self.removed * 100 // self.total


class RetentionSweeper:
    """Remove articles published before ``now - threshold``, compared per minute."""

    def __init__(
        self,
        store: RecordStore,
        observer: Observer,
        threshold: timedelta = DEFAULT_RETENTION,
        clock: Callable[[], datetime] = _utcnow,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.store = store
        self.observer = observer
        self.threshold = threshold
        self.clock = clock
        self.logger = logger or component_logger("sweeper")

    def cutoff(self, now: datetime | None = None) -> datetime:
        return _to_minute((now or self.clock()) - self.threshold)

    def sweep(self, now: datetime | None = None) -> SweepResult:
        cutoff = self.cutoff(now)
        with self.store.locked():
            total = self.store.count()
            removed = self.store.retain_where(
                lambda article: _to_minute(article.published_at) >= cutoff
            )
        result = SweepResult(removed=removed, total=total)
        self.observer.histogram("count_purged", result.removed)
        self.logger.info(
            "articles_purged",
            removed=result.removed,
            total=result.total,
            percentage=result.percentage,
            cutoff=cutoff.isoformat(),
        )
        return result


__all__ = ["DEFAULT_RETENTION", "RetentionSweeper", "SweepResult"]
