"""HTTP feed source: download a feed document and hand it to the parser."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol

import httpx
import structlog

from ..errors import FetchError
from ..logging_conf import component_logger
from .models import FeedDocument
from .parser import FeedParseError, FeedParser

DEFAULT_USER_AGENT = "headline-tracker/1.0 (+https://feeds.nos.nl/)"


class FeedSource(Protocol):
    """Anything that can turn a feed address into a parsed document."""

    def fetch(self, address: str) -> FeedDocument:
        ...


class HttpFeedSource:
    """One-shot, bounded-time feed downloads over a shared httpx client."""

    def __init__(
        self,
        timeout: float = 15.0,
        user_agent: str = DEFAULT_USER_AGENT,
        parser: FeedParser | None = None,
        client: httpx.Client | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.parser = parser or FeedParser()
        self.logger = logger or component_logger("fetcher")
        self._client = client or httpx.Client(
            follow_redirects=True,
            timeout=timeout,
            headers={"User-Agent": user_agent},
        )

    def close(self) -> None:
        self._client.close()

    def fetch(self, address: str) -> FeedDocument:
        fetched_at = datetime.now(timezone.utc)
        try:
            response = self._client.get(address)
        except httpx.HTTPError as exc:
            raise FetchError(address, f"{type(exc).__name__}: {exc}") from exc
        if response.status_code >= 400:
            raise FetchError(address, f"unexpected status {response.status_code}")
        try:
            document = self.parser.parse(response.content, fetched_at=fetched_at)
        except FeedParseError as exc:
            raise FetchError(address, f"unparsable feed: {exc}") from exc
        self.logger.debug(
            "feed_fetched", url=address, title=document.title, items=len(document.items)
        )
        return document


__all__ = ["DEFAULT_USER_AGENT", "FeedSource", "HttpFeedSource"]
