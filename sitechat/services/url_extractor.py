from __future__ import annotations

import re

URL_PATTERN = re.compile(r"https?://\S+")


def extract_urls(message: str) -> list[str]:
    """Return every http(s) URL in the message, in order, duplicates included."""
    return [url.strip() for url in URL_PATTERN.findall(message or "")]


def strip_urls(message: str) -> str:
    return URL_PATTERN.sub("", message or "").strip()
