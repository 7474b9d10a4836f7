"""Telemetry sinks: counters, histograms, health checks and events."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

import structlog
from datadog.dogstatsd import DogStatsd

from ..logging_conf import component_logger


class CheckStatus(str, Enum):
    OK = "ok"
    WARNING = "warning"


class Observer(ABC):
    """Fire-and-forget telemetry contract used by the engine."""

    @abstractmethod
    def increment(self, name: str) -> None:
        """Bump a named counter by one."""

    @abstractmethod
    def histogram(self, name: str, value: float) -> None:
        """Record a sample for a named histogram."""

    @abstractmethod
    def check(self, name: str, status: CheckStatus) -> None:
        """Report a named health check."""

    @abstractmethod
    def event(self, title: str, text: str) -> None:
        """Emit a free-form event."""


class LoggingObserver(Observer):
    """Write telemetry as structured log lines; the default sink."""

    def __init__(self, logger: structlog.BoundLogger | None = None) -> None:
        self.logger = logger or component_logger("telemetry")

    def increment(self, name: str) -> None:
        self.logger.debug("counter", metric=name)

    def histogram(self, name: str, value: float) -> None:
        self.logger.debug("histogram", metric=name, value=value)

    def check(self, name: str, status: CheckStatus) -> None:
        self.logger.debug("check", check=name, status=status.value)

    def event(self, title: str, text: str) -> None:
        self.logger.info("event", title=title, text=text)


class StatsdObserver(Observer):
    """Ship telemetry to a DogStatsD agent."""

    _STATUS_CODES = {
        CheckStatus.OK: DogStatsd.OK,
        CheckStatus.WARNING: DogStatsd.WARNING,
    }

    def __init__(
        self,
        host: str = "localhost",
        port: int = 8125,
        namespace: str = "nosedits",
        client: DogStatsd | None = None,
    ) -> None:
        self.client = client or DogStatsd(host=host, port=port, namespace=namespace)

    def increment(self, name: str) -> None:
        self.client.increment(name)

    def histogram(self, name: str, value: float) -> None:
        self.client.histogram(name, value)

    def check(self, name: str, status: CheckStatus) -> None:
        self.client.service_check(name, self._STATUS_CODES[status])

    def event(self, title: str, text: str) -> None:
        self.client.event(title, text)


class SafeObserver(Observer):
    """Wrap another observer so sink failures are logged and never raised."""

    def __init__(self, inner: Observer, logger: structlog.BoundLogger | None = None) -> None:
        self.inner = inner
        self.logger = logger or component_logger("telemetry")

    def _call(self, method: str, *args) -> None:
        try:
            getattr(self.inner, method)(*args)
        except Exception as exc:  # noqa: BLE001
            self.logger.warning("telemetry_failed", method=method, error=str(exc))

    def increment(self, name: str) -> None:
        self._call("increment", name)

    def histogram(self, name: str, value: float) -> None:
        self._call("histogram", name, value)

    def check(self, name: str, status: CheckStatus) -> None:
        self._call("check", name, status)

    def event(self, title: str, text: str) -> None:
        self._call("event", title, text)


__all__ = ["CheckStatus", "LoggingObserver", "Observer", "SafeObserver", "StatsdObserver"]
