"""
Tests for the scan frontier: deduplication, growth during iteration and
the monotonic cursor.
"""

import threading
import unittest

from site_scanner.core.frontier import Frontier
from site_scanner.core.models import ItemKind

SEED = "https://example.com/"


class TestFrontierAppend(unittest.TestCase):
    def test_seed_is_first_resource(self):
        frontier = Frontier(SEED)
        self.assertEqual(len(frontier), 1)
        self.assertIs(frontier[0], frontier.seed)
        self.assertEqual(frontier.seed.kind, ItemKind.RESOURCE)
        self.assertIsNone(frontier.seed.discovered_from)

    def test_duplicate_url_is_noop(self):
        frontier = Frontier(SEED)
        first = frontier.try_append("https://example.com/about", ItemKind.RESOURCE)
        again = frontier.try_append("https://example.com/about", ItemKind.ASSET)
        self.assertIsNotNone(first)
        self.assertIsNone(again)
        self.assertEqual(len(frontier), 2)
        self.assertEqual(frontier.lookup("https://example.com/about").kind, ItemKind.RESOURCE)

    def test_seed_cannot_be_added_twice(self):
        frontier = Frontier(SEED)
        self.assertIsNone(frontier.try_append(SEED, ItemKind.ASSET))

    def test_seed_stored_in_resolved_form(self):
        for seed in ("https://example.com", "https://example.com/#top", "https://example.com#top"):
            with self.subTest(seed=seed):
                frontier = Frontier(seed)
                self.assertEqual(frontier.seed.url, SEED)
                self.assertIsNone(frontier.try_append(SEED, ItemKind.RESOURCE))
                self.assertEqual(len(frontier), 1)

    def test_never_two_records_for_one_url(self):
        frontier = Frontier(SEED)
        urls = [f"https://example.com/p{i % 7}" for i in range(50)]
        for url in urls:
            frontier.try_append(url, ItemKind.RESOURCE)
        seen = [item.url for item in frontier]
        self.assertEqual(len(seen), len(set(seen)))
        self.assertEqual(len(frontier), 8)

    def test_discovered_from_and_lookup(self):
        frontier = Frontier(SEED)
        child = frontier.try_append(
            "https://example.com/a.js", ItemKind.ASSET, discovered_from=frontier.seed.id
        )
        self.assertEqual(child.discovered_from, frontier.seed.id)
        self.assertIs(frontier.get(child.id), child)
        self.assertIsNone(frontier.get(None))
        self.assertIsNone(frontier.get("missing"))
        self.assertIn("https://example.com/a.js", frontier)
        self.assertNotIn("https://example.com/b.js", frontier)

    def test_ids_are_unique(self):
        frontier = Frontier(SEED)
        for i in range(20):
            frontier.try_append(f"https://example.com/{i}", ItemKind.RESOURCE)
        ids = [item.id for item in frontier]
        self.assertEqual(len(ids), len(set(ids)))

    def test_concurrent_appends_keep_urls_unique(self):
        frontier = Frontier(SEED)
        urls = [f"https://example.com/{i}" for i in range(200)]

        def worker():
            for url in urls:
                frontier.try_append(url, ItemKind.RESOURCE)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(len(frontier), 201)


class TestFrontierCursor(unittest.TestCase):
    def test_next_walks_in_insertion_order(self):
        frontier = Frontier(SEED)
        frontier.try_append("https://example.com/1", ItemKind.RESOURCE)
        frontier.try_append("https://example.com/2", ItemKind.ASSET)
        urls = []
        while (item := frontier.next()) is not None:
            urls.append(item.url)
        self.assertEqual(urls, [SEED, "https://example.com/1", "https://example.com/2"])

    def test_items_appended_during_iteration_are_returned(self):
        frontier = Frontier(SEED)
        self.assertIs(frontier.next(), frontier.seed)
        frontier.try_append("https://example.com/late", ItemKind.RESOURCE)
        self.assertEqual(frontier.next().url, "https://example.com/late")
        self.assertIsNone(frontier.next())

    def test_next_after_exhaustion_sees_new_items(self):
        frontier = Frontier(SEED)
        frontier.next()
        self.assertIsNone(frontier.next())
        frontier.try_append("https://example.com/more", ItemKind.RESOURCE)
        self.assertEqual(frontier.next().url, "https://example.com/more")

    def test_cursor_is_monotonic(self):
        frontier = Frontier(SEED)
        for i in range(5):
            frontier.try_append(f"https://example.com/{i}", ItemKind.RESOURCE)
        self.assertEqual(frontier.cursor, -1)
        positions = []
        lengths = []
        while frontier.next() is not None:
            positions.append(frontier.cursor)
            lengths.append(len(frontier))
        self.assertEqual(positions, sorted(set(positions)))
        self.assertEqual(positions, list(range(6)))
        self.assertEqual(lengths, sorted(lengths))
        frontier.next()
        self.assertEqual(frontier.cursor, 5)


if __name__ == "__main__":
    unittest.main()
