"""
Scan orchestration.

The scanner owns the frontier and processes it strictly in insertion
order, one item at a time, until the frontier is exhausted or an abort is
requested.  Abort requests are honoured between items only; the item in
flight always finishes.

State machine::

    IDLE ──run()──▶ RUNNING ──frontier exhausted──▶ COMPLETED
                          └──abort() observed────▶ ABORTED
"""

import enum
from datetime import datetime, timedelta

from site_scanner.core.dispatcher import Dispatcher, FetchTarget
from site_scanner.core.frontier import Frontier
from site_scanner.core.models import utc_now
from site_scanner.core.observers import ScanObserver
from site_scanner.core.report import ScanReport, build_report
from site_scanner.utils.log import log


class ScanState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


class Scanner:
    def __init__(
        self,
        seed_url: str,
        targets: list[FetchTarget],
        observer: ScanObserver | None = None,
    ) -> None:
        self.frontier = Frontier(seed_url)
        self.dispatcher = Dispatcher(self.frontier, targets)
        self.observer = observer if observer is not None else ScanObserver()
        self.state = ScanState.IDLE
        self.started: datetime | None = None
        self.ended: datetime | None = None
        self._abort_requested = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def seed_url(self) -> str:
        return self.frontier[0].url

    @property
    def aborted(self) -> bool:
        return self.state is ScanState.ABORTED

    @property
    def duration(self) -> timedelta | None:
        if self.started is None or self.ended is None:
            return None
        return self.ended - self.started

    def abort(self) -> None:
        """Stop after the item currently in flight."""
        if not self._abort_requested:
            log.warning("[ABORT] Aborted by user!")
        self._abort_requested = True

    def run(self) -> ScanReport:
        if self.state is not ScanState.IDLE:
            raise RuntimeError(f"scan already {self.state.value}")

        self.state = ScanState.RUNNING
        self.started = utc_now()
        self.observer.scan_started(self)

        while True:
            if self._abort_requested:
                self.state = ScanState.ABORTED
                break
            item = self.frontier.next()
            if item is None:
                self.state = ScanState.COMPLETED
                break

            item.started_at = utc_now()
            self.dispatcher.process(item)
            item.ended_at = utc_now()
            item.duration = item.ended_at - item.started_at

            self.observer.item_processed(self, self.frontier.cursor, item)

        self.ended = utc_now()
        self.observer.scan_finished(self)
        return self.report()

    def report(self) -> ScanReport:
        if self.started is None or self.ended is None:
            raise RuntimeError("scan has not finished")
        return build_report(
            self.frontier,
            started=self.started,
            ended=self.ended,
            aborted=self.aborted,
            target_count=self.dispatcher.target_count,
        )
