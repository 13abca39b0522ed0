"""
Link extraction from rendered pages.

Walks a fixed, ordered set of (tag, attribute) pairs, resolves every value
against the page URL and feeds unseen URLs to the frontier.
"""

from typing import Any

from site_scanner.core.classifier import classify
from site_scanner.core.frontier import Frontier
from site_scanner.core.models import QueueItem
from site_scanner.rendering.base import Renderer
from site_scanner.utils.log import log
from site_scanner.utils.url import resolve_url

LINK_ATTRIBUTES: tuple[tuple[str, str], ...] = (
    ("a", "href"),
    ("script", "src"),
    ("link", "href"),
    ("img", "src"),
)


class LinkExtractor:
    def __init__(self, frontier: Frontier) -> None:
        self.frontier = frontier

    def extract(self, item: QueueItem, renderer: Renderer, document: Any) -> int:
        """Collect links from *document* onto *item* and the frontier.

        Returns the number of items appended to the frontier.  A failure
        while handling one (tag, attribute) pair abandons that pair only.
        """
        if item.links is None:
            item.links = []
        added = 0
        for tag, attribute in LINK_ATTRIBUTES:
            try:
                added += self._extract_pair(item, renderer, document, tag, attribute)
            except Exception as exc:
                log.debug("Extraction of %s[%s] on %s failed: %s",
                          tag, attribute, item.url, exc)
        if added:
            log.debug("[QUEUE] +%d new URLs from %s", added, item.url)
        return added

    def _extract_pair(
        self,
        item: QueueItem,
        renderer: Renderer,
        document: Any,
        tag: str,
        attribute: str,
    ) -> int:
        added = 0
        for raw in renderer.query_attributes(document, tag, attribute):
            url = resolve_url(raw, item.url)
            if url is None:
                continue
            item.add_link(url)
            if url in self.frontier:
                continue
            kind = classify(item.url, url, tag)
            if self.frontier.try_append(url, kind, discovered_from=item.id) is not None:
                added += 1
        return added
