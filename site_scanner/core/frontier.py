"""
The scan frontier: an append-only list of queue items behind a cursor.

The seed is stored in ``canonical_url`` form, the form every discovered
link is resolved to.  Items are never removed or reordered.  The cursor
only moves forward and ``next()`` re-reads the current length on every
call, so items appended while an earlier item is being processed keep the
scan loop going.
"""

import threading
from typing import Iterator

from site_scanner.core.models import ItemKind, QueueItem
from site_scanner.utils.url import canonical_url


class Frontier:
    """Insertion-ordered, URL-deduplicated queue of every item seen."""

    def __init__(self, seed_url: str) -> None:
        self._items: list[QueueItem] = []
        self._by_url: dict[str, QueueItem] = {}
        self._by_id: dict[str, QueueItem] = {}
        self._next_index = 0
        self._lock = threading.Lock()
        self.seed = self.try_append(canonical_url(seed_url), ItemKind.RESOURCE)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def try_append(
        self,
        url: str,
        kind: ItemKind,
        discovered_from: str | None = None,
    ) -> QueueItem | None:
        """Append a new item for *url*, or return ``None`` if one exists.

        The existence check and the append happen under one lock.
        """
        with self._lock:
            if url in self._by_url:
                return None
            item = QueueItem(url=url, kind=kind, discovered_from=discovered_from)
            self._items.append(item)
            self._by_url[url] = item
            self._by_id[item.id] = item
            return item

    def next(self) -> QueueItem | None:
        """Hand out the next unprocessed item; ``None`` when caught up.

        Returning ``None`` does not move the cursor, so a later call sees
        items appended in the meantime.
        """
        with self._lock:
            if self._next_index >= len(self._items):
                return None
            item = self._items[self._next_index]
            self._next_index += 1
            return item

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def cursor(self) -> int:
        """Index of the item handed out last (-1 before the first call)."""
        return self._next_index - 1

    def get(self, item_id: str | None) -> QueueItem | None:
        if item_id is None:
            return None
        return self._by_id.get(item_id)

    def lookup(self, url: str) -> QueueItem | None:
        return self._by_url.get(url)

    def __contains__(self, url: object) -> bool:
        return url in self._by_url

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[QueueItem]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> QueueItem:
        return self._items[index]
