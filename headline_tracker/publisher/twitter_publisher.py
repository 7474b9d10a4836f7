"""Post notifications as tweets through tweepy."""

from __future__ import annotations

import requests
import tweepy

from ..errors import PublishError
from .base import MAX_PAYLOAD_LENGTH, BasePublisher, PublishReceipt


class TwitterPublisher(BasePublisher):
    """Publish with OAuth 1.0a user-context credentials."""

    def __init__(
        self,
        consumer_key: str,
        consumer_secret: str,
        access_token: str,
        access_token_secret: str,
        max_length: int | None = MAX_PAYLOAD_LENGTH,
        client: tweepy.Client | None = None,
    ) -> None:
        self.max_length = max_length
        self.client = client or tweepy.Client(
            consumer_key=consumer_key,
            consumer_secret=consumer_secret,
            access_token=access_token,
            access_token_secret=access_token_secret,
        )

    def publish(self, text: str) -> PublishReceipt:
        self.ensure_length(text)
        try:
            response = self.client.create_tweet(text=text)
        except tweepy.errors.HTTPException as exc:
            code = exc.api_codes[0] if exc.api_codes else exc.response.status_code
            message = "; ".join(exc.api_messages) or str(exc)
            raise PublishError(code, message) from exc
        except tweepy.errors.TweepyException as exc:
            raise PublishError("tweepy", str(exc)) from exc
        except requests.exceptions.RequestException as exc:
            raise PublishError("network", str(exc)) from exc
        data = getattr(response, "data", None) or {}
        reference = data.get("id") if isinstance(data, dict) else None
        return PublishReceipt(text=text, reference=str(reference) if reference else None)


__all__ = ["TwitterPublisher"]
