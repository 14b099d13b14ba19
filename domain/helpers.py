"""
FitnessHub utility functions shared by services and mappers.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, List, Optional

DATA_IMAGE_PREFIX = "data:image"
PNG_DATA_URI = "data:image/png;base64,"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Return an aware UTC datetime; naive values are assumed to be UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def humanize_label(value: Optional[str], empty: str = "Not set") -> str:
    """'lightly_active' -> 'Lightly Active'."""
    if not value:
        return empty
    return " ".join(word.capitalize() for word in str(value).split("_") if word)


def format_base64_image(value: Optional[str]) -> Optional[str]:
    """Turn a raw base64 payload into a data URI the app can render."""
    if not value:
        return None
    if value.startswith(DATA_IMAGE_PREFIX):
        return value
    return f"{PNG_DATA_URI}{value}"


def preview_words(text: Optional[str], limit: int = 10) -> str:
    """First `limit` words of `text`, with an ellipsis when something was cut."""
    if not text:
        return ""
    words = text.split()
    if len(words) <= limit:
        return " ".join(words)
    return " ".join(words[:limit]) + "..."


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def load_json_list(raw: Any) -> List[Any]:
    """Decode a JSON array stored as text; anything malformed decodes to []."""
    if isinstance(raw, list):
        return raw
    if not raw:
        return []
    try:
        decoded = json.loads(raw)
    except (TypeError, ValueError):
        return []
    return decoded if isinstance(decoded, list) else []
