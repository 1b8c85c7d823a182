"""Text helpers shared by the family resolvers and the renderer."""

from __future__ import annotations

import html as html_module
import re
from urllib.parse import urlsplit

_PROTOCOL_RE = re.compile(r"^(?:\w+:)?//")


def escape_html(text: str) -> str:
    """Escape text content (``&``, ``<``, ``>``; quotes left alone)."""
    return html_module.escape(text, quote=False)


def escape_attribute(text: str) -> str:
    """Escape an attribute value for use inside double quotes."""
    return html_module.escape(text, quote=False).replace('"', "&quot;")


def shorten_url(url: str, max_path_length: int = 14) -> str:
    """Strip the protocol from a URL and cut long paths.

    Examples:
        >>> shorten_url("https://example.com")
        'example.com'
        >>> shorten_url("https://example.com/docs/getting-started")
        'example.com/docs/getting-s...'
    """
    without_protocol = _PROTOCOL_RE.sub("", url, count=1)
    hostname, _, path = without_protocol.partition("/")
    if len(path) > max_path_length:
        path = path[:max_path_length]
    return hostname + (f"/{path}..." if path else "")


def url_domain(url: str) -> str:
    """Return the hostname of ``url``, tolerating a missing scheme.

    Examples:
        >>> url_domain("https://docs.python.org/3/")
        'docs.python.org'
        >>> url_domain("example.com/path")
        'example.com'
    """
    if not _PROTOCOL_RE.match(url):
        url = f"//{url}"
    return urlsplit(url).hostname or ""
