"""In-memory record store holding every tracked article."""

from __future__ import annotations

from contextlib import contextmanager
from threading import RLock
from typing import Callable, Dict, Iterator

from .models import TrackedArticle

Key = tuple[str, str]


class RecordStore:
    """Articles indexed by (identifier, category).

    All operations take the store lock. ``locked()`` exposes the same
    reentrant lock so callers can make a lookup-then-write sequence atomic
    with respect to sweeps and other poll cycles.
    """

    def __init__(self) -> None:
        self._records: Dict[Key, TrackedArticle] = {}
        self._lock = RLock()

    @contextmanager
    def locked(self) -> Iterator["RecordStore"]:
        with self._lock:
            yield self

    def find(self, identifier: str, category: str) -> TrackedArticle | None:
        with self._lock:
            return self._records.get((identifier, category))

    def insert(self, article: TrackedArticle) -> None:
        with self._lock:
            self._records[article.key] = article

    def replace(self, old: TrackedArticle, new: TrackedArticle) -> None:
        with self._lock:
            if old.key != new.key:
                self._records.pop(old.key, None)
            self._records[new.key] = new

    def retain_where(self, predicate: Callable[[TrackedArticle], bool]) -> int:
        """Drop every record for which ``predicate`` is false; return how many went."""

        with self._lock:
            doomed = [key for key, article in self._records.items() if not predicate(article)]
            for key in doomed:
                del self._records[key]
            return len(doomed)

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def count_by_category(self, category: str) -> int:
        with self._lock:
            return sum(1 for article in self._records.values() if article.category == category)

    def categories(self) -> list[str]:
        with self._lock:
            return sorted({article.category for article in self._records.values()})

    def snapshot(self) -> list[TrackedArticle]:
        with self._lock:
            return list(self._records.values())

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        return self.count()


__all__ = ["RecordStore"]
