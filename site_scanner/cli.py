"""
Command-line interface for the site scanner.
"""

import argparse
import logging
import signal
import sys
from contextlib import ExitStack

import urllib3

from site_scanner.config import APP_NAME, APP_VERSION, load_config, parse_seed_url
from site_scanner.core import (
    LogObserver,
    ProgressObserver,
    Scanner,
    report_directory,
    write_reports,
)
from site_scanner.core.report import ScanReport
from site_scanner.errors import ConfigError, SetupError
from site_scanner.targets import browser_engines, install_browsers, open_targets
from site_scanner.utils.log import log, setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Crawl a website from one URL, fetch every page, asset "
                    "and external link it references, and write a JSON report.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m site_scanner https://example.com\n"
            "  python -m site_scanner https://example.com devices.json\n"
            "  python -m site_scanner https://example.com --progress --log-file scan.log\n"
            "\n"
            "Press Ctrl+C once to stop after the current URL and still write the report."
        ),
    )
    parser.add_argument("url", help="URL to start scanning from")
    parser.add_argument(
        "config", nargs="?",
        help="JSON config file (devices, report path, engine, timeouts)",
    )
    parser.add_argument(
        "--progress", action="store_true",
        help="Show a progress bar instead of one log line per URL",
    )
    parser.add_argument(
        "--install-browsers", action="store_true",
        help="Run 'playwright install' for the configured engines first",
    )
    parser.add_argument(
        "--no-verify-ssl", dest="verify_ssl", action="store_false", default=True,
        help="Disable TLS certificate verification for HTTP fetches",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    parser.add_argument(
        "--log-file",
        help="Write detailed logs to this file (always at DEBUG level)",
    )
    parser.add_argument(
        "--version", action="version", version=f"{APP_NAME} {APP_VERSION}",
    )
    return parser.parse_args(argv)


def log_summary(report: ScanReport) -> None:
    log.info("Items: %d discovered, %d processed",
             report.items_total, report.items_processed)
    for code, count in report.status_code_histogram.items():
        log.info("  HTTP %d: %d", code, count)
    failed = report.failures.get("failed", [])
    if failed:
        log.warning("  [ERR] %d URL(s) without a response from every target", len(failed))


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(debug=args.debug, log_file=args.log_file)

    try:
        seed_url = parse_seed_url(args.url)
        config = load_config(args.config)
    except ConfigError as exc:
        log.error("%s", exc)
        return 1
    if args.debug:
        logging.getLogger("urllib3").setLevel(logging.DEBUG)
    if not args.verify_ssl:
        config.verify_ssl = False
    if not config.verify_ssl:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        log.warning("TLS certificate verification is DISABLED")

    with ExitStack() as stack:
        try:
            if args.install_browsers:
                install_browsers(browser_engines(config))
            targets = open_targets(config, stack)
        except SetupError as exc:
            log.error("%s", exc)
            return 1

        observer = ProgressObserver() if args.progress else LogObserver()
        scanner = Scanner(seed_url, targets, observer=observer)

        def _on_interrupt(signum, frame):
            scanner.abort()
            # A second Ctrl+C interrupts immediately
            signal.signal(signal.SIGINT, signal.default_int_handler)

        previous = signal.signal(signal.SIGINT, _on_interrupt)
        try:
            report = scanner.run()
        finally:
            signal.signal(signal.SIGINT, previous)

    log_summary(report)
    directory = report_directory(config.report_path, seed_url, report.started)
    try:
        write_reports(directory, report, scanner.frontier, config)
    except OSError as exc:
        log.error("[ERR] Unable to write report to %s: %s", directory, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
