"""
URL resolution helpers.
"""

import urllib.parse

_DEFAULT_PORTS = {"http": 80, "https": 443}
_FETCHABLE_SCHEMES = ("http", "https")


def resolve_url(raw: str, page_url: str) -> str | None:
    """
    Resolve *raw* (an attribute value) against *page_url*.

    The result is in ``canonical_url`` form.  Returns
    ``None`` for empty values and for anything that does not resolve to
    an http(s) URL (``mailto:``, ``javascript:``, ``data:``, …).
    Malformed values raise ``ValueError``.
    """
    raw = raw.strip()
    if not raw or raw.startswith("#"):
        return None
    joined = urllib.parse.urljoin(page_url, raw)
    parsed = urllib.parse.urlparse(joined)
    if parsed.scheme not in _FETCHABLE_SCHEMES or not parsed.netloc:
        return None
    return canonical_url(joined)


def canonical_url(url: str) -> str:
    """
    Identity form of an absolute URL: fragment dropped, empty path as ``/``.

    ``https://example.com`` and ``https://example.com/#top`` both become
    ``https://example.com/``, the same string a ``href="/"`` on any page of
    that site resolves to.
    """
    url, _ = urllib.parse.urldefrag(url)
    parts = urllib.parse.urlsplit(url)
    if not parts.path:
        url = urllib.parse.urlunsplit(parts._replace(path="/"))
    return url


def authority(url: str) -> tuple[str, str, int | None]:
    """Return ``(scheme, host, port)`` with the scheme's default port filled in."""
    parsed = urllib.parse.urlparse(url)
    scheme = parsed.scheme.lower()
    port = parsed.port or _DEFAULT_PORTS.get(scheme)
    return scheme, (parsed.hostname or "").lower(), port


def url_host(url: str) -> str:
    """Lower-cased host name of *url* (``"unknown"`` when it has none)."""
    return (urllib.parse.urlparse(url).hostname or "unknown").lower()
