"""Dry-run publisher that only logs the payload."""

from __future__ import annotations

import structlog

from ..logging_conf import component_logger
from .base import MAX_PAYLOAD_LENGTH, BasePublisher, PublishReceipt


class LogPublisher(BasePublisher):
    def __init__(
        self,
        max_length: int | None = MAX_PAYLOAD_LENGTH,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.max_length = max_length
        self.logger = logger or component_logger("publisher")
        self.sent: list[str] = []

    def publish(self, text: str) -> PublishReceipt:
        self.ensure_length(text)
        self.sent.append(text)
        self.logger.info("notification_logged", text=text)
        return PublishReceipt(text=text)


__all__ = ["LogPublisher"]
