"""Feed document parsing backed by feedparser."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import feedparser

from .models import FeedDocument, FeedItem


class FeedParseError(ValueError):
    """Raised when a payload does not look like a feed at all."""


class FeedParser:
    """Turn raw RSS/Atom payloads into :class:`FeedDocument` objects."""

    def parse(self, payload: bytes | str, fetched_at: datetime | None = None) -> FeedDocument:
        fetched_at = fetched_at or datetime.now(timezone.utc)
        parsed = feedparser.parse(payload)
        title = str(parsed.feed.get("title") or "")
        if parsed.bozo and not parsed.entries and not title:
            reason = getattr(parsed, "bozo_exception", None) or "unrecognised document"
            raise FeedParseError(str(reason))
        items: list[FeedItem] = []
        for entry in parsed.entries:
            item = self.parse_entry(entry, fetched_at)
            if item is not None:
                items.append(item)
        return FeedDocument(title=title, items=items)

    def parse_entry(self, entry: Any, fetched_at: datetime) -> FeedItem | None:
        identifier = entry.get("id") or entry.get("link")
        if not identifier:
            return None
        return FeedItem(
            identifier=str(identifier),
            title=str(entry.get("title") or ""),
            published_at=self._entry_datetime(entry) or fetched_at,
        )

    @staticmethod
    def _entry_datetime(entry: Any) -> datetime | None:
        for field in ("published_parsed", "updated_parsed"):
            value = entry.get(field)
            if value:
                return datetime(*value[:6], tzinfo=timezone.utc)
        return None


__all__ = ["FeedParseError", "FeedParser"]
