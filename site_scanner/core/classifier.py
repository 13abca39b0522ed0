"""
Classification of discovered URLs.

A URL whose authority differs from the page it was found on is
``EXTERNAL``.  Otherwise the referencing tag decides: hyperlinks are
navigable ``RESOURCE`` items, everything else is an ``ASSET``.
"""

from site_scanner.core.models import ItemKind
from site_scanner.utils.url import authority

# Tags whose URLs are pages to render and extract links from
NAVIGABLE_TAGS = frozenset({"a"})


def is_base_of(origin_url: str, candidate_url: str) -> bool:
    """True if *candidate_url* shares the scheme, host and port of *origin_url*."""
    return authority(origin_url) == authority(candidate_url)


def classify(origin_url: str, candidate_url: str, tag: str) -> ItemKind:
    if not is_base_of(origin_url, candidate_url):
        return ItemKind.EXTERNAL
    if tag.lower() in NAVIGABLE_TAGS:
        return ItemKind.RESOURCE
    return ItemKind.ASSET
