"""Shared parsing utilities for user input and drop payloads.

Foundation module used by the document store and the navigation
resolver: URL detection/normalisation and HTML clean-up.
"""

from __future__ import annotations

import html
import re
from urllib.parse import urlsplit, urlunsplit

# Schemes accepted as explicit URLs
URL_SCHEMES = ("http", "https")

# Bare host names like "example.com", "www.example.org:8080/page?q=1"
BARE_HOST_RE = re.compile(
    r'^(?P<host>(?:[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+(?P<tld>[a-z]{2,63}))(?::\d{1,5})?(?:[/?#]\S*)?$',
    re.IGNORECASE,
)

# Top-level domains accepted on bare host names without a "www." prefix
BARE_HOST_TLDS = frozenset({
    "com", "org", "net", "edu", "gov", "int", "mil", "info", "biz",
    "io", "dev", "app", "ai", "co", "me", "tv", "uk", "us", "eu",
})

# Scheme prefix assumed for bare host names
DEFAULT_SCHEME = "https"

_DEFAULT_PORTS = {"http": 80, "https": 443}

_TAG_RE = re.compile(r'<[^>]*>')
_WS_RE = re.compile(r'\s+')


def as_url(text: str | None) -> str | None:
    """Return *text* as a URL if it looks like one, else None.

    Explicit ``http``/``https`` URLs are returned unchanged (stripped).
    Bare host names get ``https://`` prepended when they start with
    ``www.`` or end in one of :data:`BARE_HOST_TLDS`. Anything containing
    whitespace is never a URL.
    """
    if not text:
        return None
    candidate = text.strip()
    if not candidate or _WS_RE.search(candidate):
        return None

    parts = urlsplit(candidate)
    if parts.scheme.lower() in URL_SCHEMES and parts.netloc:
        return candidate

    # Matched on the raw text: "example.com:8080" parses as scheme "example.com"
    match = BARE_HOST_RE.match(candidate)
    if match is None:
        return None
    host = match.group("host").lower()
    if host.startswith("www.") or match.group("tld").lower() in BARE_HOST_TLDS:
        return f"{DEFAULT_SCHEME}://{candidate}"
    return None


def normalize_url(url: str) -> str:
    """Canonical dedup key for a URL.

    Lower-cases scheme and host, drops default ports and the fragment,
    and uses ``/`` for an empty path. The query string is kept verbatim.
    """
    parts = urlsplit(url.strip())
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    try:
        port = parts.port
    except ValueError:
        port = None
    netloc = f"[{host}]" if ":" in host else host
    if parts.username:
        userinfo = parts.username
        if parts.password:
            userinfo += f":{parts.password}"
        netloc = f"{userinfo}@{netloc}"
    if port is not None and _DEFAULT_PORTS.get(scheme) != port:
        netloc += f":{port}"
    path = parts.path or "/"
    return urlunsplit((scheme, netloc, path, parts.query, ""))


def strip_nul(text: str) -> str:
    """Remove every NUL character (seen in some browsers' clipboard HTML)."""
    return text.replace("\x00", "")


def html_to_label(markup: str, max_chars: int | None = 80) -> str:
    """Collapse an HTML note to a one-line plain text label.

    Labels longer than *max_chars* are cut with "..."; None keeps everything.
    """
    text = html.unescape(_TAG_RE.sub(" ", markup))
    text = _WS_RE.sub(" ", text).strip()
    if max_chars is not None and len(text) > max_chars:
        text = text[: max_chars - 3].rstrip() + "..."
    return text
