"""
Report persistence: one directory per scan holding the summary, the full
queue dump and the effective configuration.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from site_scanner.config import (
    CONFIG_REPORT_FILE,
    QUEUE_REPORT_FILE,
    REPORT_TIMESTAMP_FORMAT,
    REPORTS_DIRNAME,
    SCAN_REPORT_FILE,
    ScanConfig,
)
from site_scanner.core.frontier import Frontier
from site_scanner.core.report import ScanReport
from site_scanner.utils.log import log
from site_scanner.utils.url import url_host


def report_directory(report_path: Path, seed_url: str, started: datetime) -> Path:
    """``<report_path>/reports/<host>/<timestamp>`` for a scan of *seed_url*."""
    stamp = started.astimezone().strftime(REPORT_TIMESTAMP_FORMAT)
    return Path(report_path) / REPORTS_DIRNAME / url_host(seed_url) / stamp


def save_json(path: Path, data: Any) -> None:
    """Write *data* as indented UTF-8 JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    log.debug("Saved → %s", path)


def write_reports(
    directory: Path,
    report: ScanReport,
    frontier: Frontier,
    config: ScanConfig,
) -> Path:
    """Write ``scan.json``, ``queue.json`` and ``config.json`` to *directory*."""
    save_json(directory / SCAN_REPORT_FILE, report.to_dict())
    save_json(directory / QUEUE_REPORT_FILE, [item.to_dict() for item in frontier])
    save_json(directory / CONFIG_REPORT_FILE, config.to_dict())
    log.info("[REPORT] Report written to %s", directory)
    return directory
