"""Canonical URL keys for cross-engine deduplication."""

from urllib.parse import parse_qsl, urlencode, urlsplit

_TRACKING_QUERY_KEYS = {
    "ref",
    "fbclid",
    "gclid",
    "msclkid",
    "spm",
    "from",
}


def _is_tracking_key(key: str) -> bool:
    lowered = key.lower()
    return lowered.startswith("utm_") or lowered in _TRACKING_QUERY_KEYS


def normalize_url(url: str) -> str:
    """Build the dedup key for ``url``: host (no ``www.``) + path + non-tracking query.

    Scheme, port, fragment, trailing slashes and parameter order are dropped, so
    ``http://www.example.com/a/?utm_source=x`` and ``https://example.com/a``
    collapse to the same key. Anything that is not an absolute URL falls back to
    its lowercased text.
    """
    raw = url or ""
    try:
        parsed = urlsplit(raw.strip())
        hostname = parsed.hostname
    except ValueError:
        return raw.lower()
    if not parsed.scheme or not hostname:
        return raw.lower()

    host = hostname[4:] if hostname.startswith("www.") else hostname
    path = parsed.path.rstrip("/")

    pairs = [
        (key, value)
        for key, value in parse_qsl(parsed.query, keep_blank_values=True)
        if not _is_tracking_key(key)
    ]
    query = urlencode(sorted(pairs))

    key = f"{host}{path}?{query}" if query else f"{host}{path}"
    return key.lower()
