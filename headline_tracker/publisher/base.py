"""Publisher Service Provider Interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..errors import PublishError

MAX_PAYLOAD_LENGTH = 280


@dataclass(frozen=True, slots=True)
class PublishReceipt:
    """Successful delivery; ``reference`` is the downstream id when one exists."""

    text: str
    reference: str | None = None


class BasePublisher(ABC):
    """Uniform publisher contract: deliver one text payload or raise PublishError."""

    max_length: int | None = MAX_PAYLOAD_LENGTH

    @abstractmethod
    def publish(self, text: str) -> PublishReceipt:
        """Deliver a single notification."""

    def close(self) -> None:
        """Release underlying resources."""

    def ensure_length(self, text: str) -> None:
        if self.max_length is not None and len(text) > self.max_length:
            raise PublishError(
                "length", f"payload is {len(text)} characters, limit is {self.max_length}"
            )


__all__ = ["BasePublisher", "MAX_PAYLOAD_LENGTH", "PublishReceipt"]
