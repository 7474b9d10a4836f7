"""Tracking engine: store → detect → sweep, plus the feed source it reads from."""

from .detector import ChangeDetector
from .fetcher import FeedSource, HttpFeedSource
from .models import ChangeEvent, Detection, FeedDocument, FeedItem, Outcome, TrackedArticle
from .parser import FeedParseError, FeedParser
from .store import RecordStore
from .sweeper import DEFAULT_RETENTION, RetentionSweeper, SweepResult
from .text import capitalize_words, derive_category, render_notification
from .thread_pool import ThreadPoolManager

__all__ = [
    "ChangeDetector",
    "ChangeEvent",
    "DEFAULT_RETENTION",
    "Detection",
    "FeedDocument",
    "FeedItem",
    "FeedParseError",
    "FeedParser",
    "FeedSource",
    "HttpFeedSource",
    "Outcome",
    "RecordStore",
    "RetentionSweeper",
    "SweepResult",
    "ThreadPoolManager",
    "TrackedArticle",
    "capitalize_words",
    "derive_category",
    "render_notification",
]
