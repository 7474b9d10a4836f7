"""Publisher SPI and implementations."""

from .base import MAX_PAYLOAD_LENGTH, BasePublisher, PublishReceipt
from .log_publisher import LogPublisher
from .telegram_publisher import TelegramPublisher
from .twitter_publisher import TwitterPublisher

__all__ = [
    "BasePublisher",
    "LogPublisher",
    "MAX_PAYLOAD_LENGTH",
    "PublishReceipt",
    "TelegramPublisher",
    "TwitterPublisher",
]
