"""Domain records flowing through the tracking engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True, slots=True)
class FeedItem:
    """One entry as returned by a feed source."""

    identifier: str
    title: str
    published_at: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "published_at", _as_utc(self.published_at))


@dataclass(frozen=True, slots=True)
class TrackedArticle:
    """An article held by the record store, keyed by (identifier, category)."""

    identifier: str
    category: str
    title: str
    published_at: datetime

    @property
    def key(self) -> tuple[str, str]:
        return (self.identifier, self.category)

    @classmethod
    def from_item(cls, item: FeedItem, category: str) -> "TrackedArticle":
        return cls(
            identifier=item.identifier,
            category=category,
            title=item.title,
            published_at=_as_utc(item.published_at),
        )


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A detected headline change, consumed once by the publisher."""

    category: str
    old_title: str
    new_title: str
    identifier: str


class Outcome(str, Enum):
    NEW = "new"
    STALE = "stale"
    CHANGED = "changed"


@dataclass(frozen=True, slots=True)
class Detection:
    outcome: Outcome
    event: ChangeEvent | None = None


@dataclass(slots=True)
class FeedDocument:
    """Parsed feed: its own title plus the items in document order."""

    title: str
    items: list[FeedItem] = field(default_factory=list)


__all__ = [
    "ChangeEvent",
    "Detection",
    "FeedDocument",
    "FeedItem",
    "Outcome",
    "TrackedArticle",
]
