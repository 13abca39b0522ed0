"""
Tests for report persistence and the command-line entry point.
"""

import json
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

from fakes import FakeRenderer, make_target

from site_scanner.cli import main, parse_args
from site_scanner.config import ScanConfig
from site_scanner.core.frontier import Frontier
from site_scanner.core.report import build_report
from site_scanner.core.storage import report_directory, write_reports
from site_scanner.errors import SetupError

SEED = "https://example.com/"


class TestStorage(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_report_directory(self):
        started = datetime(2024, 5, 1, 12, 30, 5, tzinfo=timezone.utc)

        directory = report_directory(self.tmp, "https://Example.com:8443/x", started)

        stamp = started.astimezone().strftime("%Y-%m-%d-%H-%M-%S")
        self.assertEqual(directory, self.tmp / "reports" / "example.com" / stamp)

    def test_write_reports(self):
        frontier = Frontier(SEED)
        now = datetime.now(timezone.utc)
        report = build_report(frontier, started=now, ended=now, aborted=False, target_count=1)
        config = ScanConfig(report_path=self.tmp)
        directory = self.tmp / "reports" / "example.com" / "run"

        write_reports(directory, report, frontier, config)

        scan = json.loads((directory / "scan.json").read_text(encoding="utf-8"))
        queue = json.loads((directory / "queue.json").read_text(encoding="utf-8"))
        saved = json.loads((directory / "config.json").read_text(encoding="utf-8"))
        self.assertEqual(scan["failures"], {"failed": [SEED]})
        self.assertEqual([item["url"] for item in queue], [SEED])
        self.assertEqual(saved["report_path"], str(self.tmp))


class TestParseArgs(unittest.TestCase):
    def test_defaults(self):
        args = parse_args([SEED])

        self.assertEqual(args.url, SEED)
        self.assertIsNone(args.config)
        self.assertTrue(args.verify_ssl)
        self.assertFalse(args.progress)

    def test_flags(self):
        args = parse_args([SEED, "devices.json", "--no-verify-ssl", "--progress", "--debug"])

        self.assertEqual(args.config, "devices.json")
        self.assertFalse(args.verify_ssl)
        self.assertTrue(args.progress)
        self.assertTrue(args.debug)


class TestMain(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.config_path = self.tmp / "config.json"
        self.config_path.write_text(
            json.dumps({"report_path": str(self.tmp), "rendering_engine": "static"}),
            encoding="utf-8",
        )

    def tearDown(self):
        self._tmp.cleanup()

    def test_invalid_url(self):
        self.assertEqual(main(["ftp://example.com"]), 1)

    def test_invalid_config(self):
        self.assertEqual(main([SEED, str(self.tmp / "missing.json")]), 1)

    @patch("site_scanner.cli.open_targets")
    def test_setup_failure(self, open_targets):
        open_targets.side_effect = SetupError("no browser")

        self.assertEqual(main([SEED, str(self.config_path)]), 1)

    @patch("site_scanner.cli.open_targets")
    def test_scan_writes_reports(self, open_targets):
        renderer = FakeRenderer(pages={SEED: (200, {("a", "href"): ["/about"]})})
        open_targets.return_value = [make_target(renderer=renderer)]

        self.assertEqual(main([SEED, str(self.config_path)]), 0)

        runs = list((self.tmp / "reports" / "example.com").iterdir())
        self.assertEqual(len(runs), 1)
        scan = json.loads((runs[0] / "scan.json").read_text(encoding="utf-8"))
        self.assertEqual(scan["items_total"], 2)
        self.assertEqual(scan["status_code_histogram"], {"200": 2})
        self.assertFalse(scan["aborted_by_user"])
        config, _ = open_targets.call_args.args
        self.assertIsInstance(config, ScanConfig)
        self.assertEqual(config.rendering_engine, "static")


if __name__ == "__main__":
    unittest.main()
