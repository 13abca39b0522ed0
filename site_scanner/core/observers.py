"""
Scan observers: hooks the scanner calls on start, after every processed
item and on finish.  The scanner itself never writes to the console.
"""

import logging
from typing import TYPE_CHECKING

from tqdm import tqdm

from site_scanner.core.models import QueueItem
from site_scanner.utils.log import log

if TYPE_CHECKING:
    from site_scanner.core.scanner import Scanner


class ScanObserver:
    """No-op base class; override the hooks you need."""

    def scan_started(self, scanner: "Scanner") -> None:
        pass

    def item_processed(self, scanner: "Scanner", index: int, item: QueueItem) -> None:
        pass

    def scan_finished(self, scanner: "Scanner") -> None:
        pass


class LogObserver(ScanObserver):
    """One log line per processed item: ``[n/total] [status] url``."""

    def scan_started(self, scanner: "Scanner") -> None:
        log.info("Scanning %s started at %s", scanner.seed_url, scanner.started)

    def item_processed(self, scanner: "Scanner", index: int, item: QueueItem) -> None:
        codes = item.status_codes()
        status = ",".join(str(c) for c in codes) if codes else "ERR"
        healthy = bool(codes) and not item.errors and all(c < 400 for c in codes)
        log.log(
            logging.INFO if healthy else logging.WARNING,
            "[%d/%d] [%s] [%s] %s",
            index + 1, len(scanner.frontier), status, item.kind.name, item.url,
        )
        for error in item.errors:
            log.debug("  [ERR] %s", error.strip())

    def scan_finished(self, scanner: "Scanner") -> None:
        if scanner.aborted:
            log.warning("[ABORT] Scan aborted after %d of %d items",
                        scanner.frontier.cursor + 1, len(scanner.frontier))
        log.info("Scanning ended at %s", scanner.ended)
        log.info("Scanning took %s", scanner.duration)


class ProgressObserver(ScanObserver):
    """``tqdm`` progress bar whose total follows the growing frontier."""

    def __init__(self) -> None:
        self._bar: tqdm | None = None
        self._errors = 0

    def scan_started(self, scanner: "Scanner") -> None:
        self._bar = tqdm(
            desc="Scanning",
            unit="URL",
            total=len(scanner.frontier),
            dynamic_ncols=True,
        )

    def item_processed(self, scanner: "Scanner", index: int, item: QueueItem) -> None:
        if self._bar is None:
            return
        if item.errors:
            self._errors += 1
        self._bar.total = len(scanner.frontier)
        self._bar.update(1)
        self._bar.set_postfix(queued=len(scanner.frontier) - index - 1, err=self._errors)

    def scan_finished(self, scanner: "Scanner") -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None
        if scanner.aborted:
            log.warning("[ABORT] Scan aborted after %d of %d items",
                        scanner.frontier.cursor + 1, len(scanner.frontier))
        log.info("Scanning took %s", scanner.duration)
