"""Formatting helpers for displaying search sources."""

from datetime import datetime
from urllib.parse import urlparse

DATE_UNAVAILABLE = "Date not available"


def site_name(url: str) -> str:
    """Hostname of ``url`` without a leading ``www.``; the raw URL if it has none."""
    hostname = urlparse(url).hostname
    if not hostname:
        return url
    return hostname.removeprefix("www.")


def format_published_date(published: datetime | None) -> str:
    """Human-readable publish date, or a placeholder when unknown."""
    if published is None:
        return DATE_UNAVAILABLE
    return published.strftime("%b %d, %Y").replace(" 0", " ")


def truncate(text: str, limit: int) -> str:
    """Shorten ``text`` to ``limit`` characters, marking the cut with an ellipsis."""
    text = " ".join(text.split())
    if len(text) <= limit:
        return text
    return text[: max(limit - 1, 0)].rstrip() + "…"
