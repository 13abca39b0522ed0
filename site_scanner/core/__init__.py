"""Core scan logic – frontier, classification, fetch strategies and reporting."""

from site_scanner.core.models import ItemKind, QueueItem, QueueResponse
from site_scanner.core.frontier import Frontier
from site_scanner.core.classifier import classify, is_base_of
from site_scanner.core.extractor import LINK_ATTRIBUTES, LinkExtractor
from site_scanner.core.dispatcher import Dispatcher, FetchTarget
from site_scanner.core.observers import LogObserver, ProgressObserver, ScanObserver
from site_scanner.core.report import ScanReport, build_report
from site_scanner.core.scanner import Scanner, ScanState
from site_scanner.core.storage import report_directory, write_reports

__all__ = [
    "ItemKind",
    "QueueItem",
    "QueueResponse",
    "Frontier",
    "classify",
    "is_base_of",
    "LINK_ATTRIBUTES",
    "LinkExtractor",
    "Dispatcher",
    "FetchTarget",
    "LogObserver",
    "ProgressObserver",
    "ScanObserver",
    "ScanReport",
    "build_report",
    "Scanner",
    "ScanState",
    "report_directory",
    "write_reports",
]
