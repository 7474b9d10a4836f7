"""Configuration package exports."""

from .loader import ConfigLocator, ConfigRepository
from .models import (
    AppConfig,
    FeedConfig,
    FetchSettings,
    PublisherConfig,
    ScheduleSettings,
    TelemetryConfig,
)

__all__ = [
    "AppConfig",
    "ConfigLocator",
    "ConfigRepository",
    "FeedConfig",
    "FetchSettings",
    "PublisherConfig",
    "ScheduleSettings",
    "TelemetryConfig",
]
