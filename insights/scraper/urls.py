"""URL validation performed by callers before invoking the pipeline."""

from __future__ import annotations

from urllib.parse import urlsplit

_ALLOWED_SCHEMES = frozenset({"http", "https"})


def is_valid_http_url(url: str) -> bool:
    """Return ``True`` if *url* is an absolute ``http``/``https`` URL with a host."""
    if not url or not url.strip():
        return False
    try:
        parts = urlsplit(url.strip())
        # Accessing .port validates the netloc (raises on e.g. "host:abc").
        parts.port
    except ValueError:
        return False
    return parts.scheme.lower() in _ALLOWED_SCHEMES and bool(parts.hostname)
