"""Pure text transforms: category names and notification payloads."""

from __future__ import annotations

import re
from typing import Iterable

from .models import ChangeEvent

DEFAULT_BOILERPLATE: tuple[str, ...] = ("NOS.nl", "NOS", "nieuws")

_WORD_START = re.compile(r"(?:^|\s)\S")


def capitalize_words(text: str) -> str:
    """Uppercase the first character of every whitespace-delimited word.

    Only that character changes; the rest of each word is left as-is.
    """

    return _WORD_START.sub(lambda match: match.group(0).upper(), text)


def boilerplate_pattern(tokens: Iterable[str]) -> re.Pattern[str] | None:
    ordered = sorted({token for token in tokens if token}, key=len, reverse=True)
    if not ordered:
        return None
    return re.compile("|".join(re.escape(token) for token in ordered), re.IGNORECASE)


def derive_category(title: str | None, tokens: Iterable[str] = DEFAULT_BOILERPLATE) -> str:
    """Turn a feed title such as ``"NOS Nieuws Tech"`` into a display category."""

    if not title:
        return ""
    pattern = boilerplate_pattern(tokens)
    cleaned = pattern.sub("", title) if pattern else title
    return capitalize_words(cleaned).strip()


def render_notification(event: ChangeEvent) -> str:
    """Render the fixed-format announcement for a headline change."""

    body = (
        f"De kop «{event.old_title.strip()}» is zojuist gewijzigd naar "
        f"«{event.new_title.strip()}» {event.identifier}"
    )
    if not event.category:
        return body
    return f"[{event.category}] {body}"


__all__ = [
    "DEFAULT_BOILERPLATE",
    "boilerplate_pattern",
    "capitalize_words",
    "derive_category",
    "render_notification",
]
