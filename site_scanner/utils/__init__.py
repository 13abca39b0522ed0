"""Utility helpers for URL resolution, HTTP metadata and logging."""

from site_scanner.utils.url import authority, canonical_url, resolve_url, url_host
from site_scanner.utils.http_meta import first_header_values, status_text
from site_scanner.utils.log import setup_logging, log

__all__ = [
    "authority",
    "canonical_url",
    "resolve_url",
    "url_host",
    "first_header_values",
    "status_text",
    "setup_logging",
    "log",
]
