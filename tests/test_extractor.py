"""
Tests for link extraction from rendered documents.
"""

import unittest

from fakes import FakeRenderer

from site_scanner.core.extractor import LINK_ATTRIBUTES, LinkExtractor
from site_scanner.core.frontier import Frontier
from site_scanner.core.models import ItemKind

SEED = "https://example.com/"


class TestLinkExtraction(unittest.TestCase):
    def setUp(self):
        self.frontier = Frontier(SEED)
        self.seed = self.frontier.seed
        self.renderer = FakeRenderer()
        self.extractor = LinkExtractor(self.frontier)

    def test_attribute_pairs_are_fixed(self):
        self.assertEqual(
            LINK_ATTRIBUTES,
            (("a", "href"), ("script", "src"), ("link", "href"), ("img", "src")),
        )

    def test_all_pairs_feed_the_frontier(self):
        document = {
            ("a", "href"): ["/about", "https://other.org/"],
            ("script", "src"): ["/js/app.js"],
            ("link", "href"): ["/css/site.css"],
            ("img", "src"): ["https://cdn.example.net/logo.png"],
        }
        added = self.extractor.extract(self.seed, self.renderer, document)

        self.assertEqual(added, 5)
        kinds = {item.url: item.kind for item in self.frontier}
        self.assertEqual(kinds, {
            SEED: ItemKind.RESOURCE,
            "https://example.com/about": ItemKind.RESOURCE,
            "https://other.org/": ItemKind.EXTERNAL,
            "https://example.com/js/app.js": ItemKind.ASSET,
            "https://example.com/css/site.css": ItemKind.ASSET,
            "https://cdn.example.net/logo.png": ItemKind.EXTERNAL,
        })
        for item in list(self.frontier)[1:]:
            self.assertEqual(item.discovered_from, self.seed.id)

    def test_outgoing_links_keep_page_order_without_duplicates(self):
        document = {
            ("a", "href"): ["/b", "/a", "/b#section", "/a"],
            ("img", "src"): ["/a"],
        }
        self.extractor.extract(self.seed, self.renderer, document)
        self.assertEqual(
            self.seed.links, ["https://example.com/b", "https://example.com/a"]
        )

    def test_known_urls_are_not_reclassified(self):
        self.frontier.try_append("https://example.com/logo.png", ItemKind.ASSET)
        page = self.frontier.try_append("https://example.com/gallery", ItemKind.RESOURCE)

        added = self.extractor.extract(
            page, self.renderer, {("a", "href"): ["/logo.png", "/"]}
        )

        self.assertEqual(added, 0)
        self.assertEqual(self.frontier.lookup("https://example.com/logo.png").kind, ItemKind.ASSET)
        self.assertEqual(len(self.frontier), 3)
        self.assertEqual(page.links, ["https://example.com/logo.png", SEED])

    def test_first_discovery_decides_kind(self):
        self.extractor.extract(self.seed, self.renderer, {
            ("a", "href"): ["/doc.pdf"],
            ("link", "href"): ["/doc.pdf"],
        })
        self.assertEqual(self.frontier.lookup("https://example.com/doc.pdf").kind, ItemKind.RESOURCE)

    def test_unfetchable_values_are_skipped(self):
        added = self.extractor.extract(self.seed, self.renderer, {
            ("a", "href"): ["mailto:me@example.com", "javascript:void(0)", "", "#top"],
        })
        self.assertEqual(added, 0)
        self.assertEqual(self.seed.links, [])
        self.assertEqual(len(self.frontier), 1)

    def test_failure_abandons_only_that_pair(self):
        document = {
            ("a", "href"): ["/about"],
            ("script", "src"): ["/js/first.js", "http://[::1/broken", "/js/never.js"],
            ("img", "src"): ["/img/ok.png"],
        }
        self.extractor.extract(self.seed, self.renderer, document)

        self.assertIn("https://example.com/about", self.frontier)
        self.assertIn("https://example.com/js/first.js", self.frontier)
        self.assertNotIn("https://example.com/js/never.js", self.frontier)
        self.assertIn("https://example.com/img/ok.png", self.frontier)
        self.assertEqual(self.seed.errors, [])

    def test_empty_document_sets_empty_links(self):
        self.extractor.extract(self.seed, self.renderer, {})
        self.assertEqual(self.seed.links, [])


if __name__ == "__main__":
    unittest.main()
