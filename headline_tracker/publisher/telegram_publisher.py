"""Telegram Bot API publisher.

Sends each notification as a plain text message to a single chat.
"""

from __future__ import annotations

import httpx

from ..errors import PublishError
from .base import BasePublisher, PublishReceipt

TELEGRAM_API = "https://api.telegram.org"


class TelegramPublisher(BasePublisher):
    max_length = 4096

    def __init__(
        self,
        bot_token: str,
        chat_id: str,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._bot_token = bot_token
        self._chat_id = chat_id
        self._client = client or httpx.Client(timeout=timeout)

    def _endpoint(self) -> str:
        return f"{TELEGRAM_API}/bot{self._bot_token}/sendMessage"

    def publish(self, text: str) -> PublishReceipt:
        self.ensure_length(text)
        payload = {
            "chat_id": self._chat_id,
            "text": text,
            "disable_web_page_preview": False,
        }
        try:
            response = self._client.post(self._endpoint(), json=payload)
        except httpx.HTTPError as exc:
            raise PublishError("network", str(exc)) from exc
        if response.status_code >= 400:
            raise PublishError(response.status_code, response.text)
        try:
            body = response.json()
        except ValueError as exc:
            raise PublishError("telegram", f"Invalid response body: {response.text[:200]}") from exc
        if not isinstance(body, dict):
            raise PublishError("telegram", "Unexpected response payload")
        if not body.get("ok", False):
            raise PublishError(body.get("error_code", "telegram"), body.get("description", ""))
        message_id = (body.get("result") or {}).get("message_id")
        return PublishReceipt(text=text, reference=str(message_id) if message_id else None)

    def close(self) -> None:
        self._client.close()


__all__ = ["TelegramPublisher"]
