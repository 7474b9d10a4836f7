"""Error taxonomy shared by the tracker and its adapters."""

from __future__ import annotations


class HeadlineTrackerError(Exception):
    """Base class for all tracker errors."""


class FetchError(HeadlineTrackerError):
    """A feed could not be downloaded or parsed; the feed is skipped this cycle."""

    def __init__(self, address: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {address}: {reason}")
        self.address = address
        self.reason = reason


class PublishError(HeadlineTrackerError):
    """The publisher rejected or failed to deliver a notification."""

    def __init__(self, code: str | int, message: str) -> None:
        super().__init__(f"Error {code}: {message}")
        self.code = code
        self.message = message


class ConfigError(HeadlineTrackerError):
    """Configuration is missing or invalid; fatal at startup."""


__all__ = ["ConfigError", "FetchError", "HeadlineTrackerError", "PublishError"]
