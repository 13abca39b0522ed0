"""
Scan summary derived from a finished frontier.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from site_scanner.core.frontier import Frontier


@dataclass
class ScanReport:
    aborted_by_user: bool
    started: datetime
    ended: datetime
    items_total: int
    items_processed: int
    status_code_histogram: dict[int, int] = field(default_factory=dict)
    failures: dict[str, list[str]] = field(default_factory=dict)

    @property
    def duration(self) -> timedelta:
        return self.ended - self.started

    def to_dict(self) -> dict[str, Any]:
        return {
            "aborted_by_user": self.aborted_by_user,
            "started": self.started.isoformat(),
            "ended": self.ended.isoformat(),
            "duration": self.duration.total_seconds(),
            "items_total": self.items_total,
            "items_processed": self.items_processed,
            "status_code_histogram": {
                str(code): count for code, count in self.status_code_histogram.items()
            },
            "failures": {key: list(urls) for key, urls in self.failures.items()},
        }


def build_report(
    frontier: Frontier,
    started: datetime,
    ended: datetime,
    aborted: bool,
    target_count: int,
) -> ScanReport:
    """Summarise *frontier* without modifying it.

    ``failures["failed"]`` lists every URL with fewer responses than
    *target_count*; every other key is a non-200 status code listing the
    URLs that returned it at least once.
    """
    items = list(frontier)
    histogram: dict[int, int] = {}
    by_code: dict[int, list[str]] = {}
    for item in items:
        for code in item.status_codes():
            histogram[code] = histogram.get(code, 0) + 1
            by_code.setdefault(code, []).append(item.url)

    failures: dict[str, list[str]] = {
        "failed": [item.url for item in items if len(item.responses) < target_count],
    }
    for code in sorted(by_code):
        if code != 200:
            failures[str(code)] = by_code[code]

    return ScanReport(
        aborted_by_user=aborted,
        started=started,
        ended=ended,
        items_total=len(items),
        items_processed=sum(1 for item in items if item.processed),
        status_code_histogram=dict(sorted(histogram.items())),
        failures=failures,
    )
