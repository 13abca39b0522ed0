"""
site_scanner
============
Crawl a website from a single URL, fetch every page, asset and external
reference it links to, and record the outcome of each fetch.

Package structure
-----------------
site_scanner/
├── __init__.py       – package init and public API
├── config.py         – defaults, ScanConfig / Device, config-file loading
├── errors.py         – exception hierarchy
├── session.py        – requests.Session factory
├── targets.py        – fetch-target setup (browsers, pages, sessions)
├── cli.py            – argparse CLI (``python -m site_scanner``)
├── core/             – frontier, classifier, extractor, dispatcher,
│                       scanner, report builder, report storage
├── rendering/        – Renderer interface, Playwright and static engines
└── utils/            – URL resolution, HTTP metadata, logging

Quick start
-----------
    from contextlib import ExitStack
    from site_scanner import Scanner, load_config, open_targets

    config = load_config()
    with ExitStack() as stack:
        scanner = Scanner("https://example.com/", open_targets(config, stack))
        report = scanner.run()
    print(report.status_code_histogram)
"""

from .config import Device, ScanConfig, load_config, parse_seed_url
from .core import (
    Frontier,
    ItemKind,
    QueueItem,
    QueueResponse,
    Scanner,
    ScanReport,
    ScanState,
    build_report,
)
from .errors import ConfigError, RenderError, RenderTimeout, ScannerError, SetupError
from .targets import open_targets

__version__ = "0.1.0"

__all__ = [
    "Device",
    "ScanConfig",
    "load_config",
    "parse_seed_url",
    "Frontier",
    "ItemKind",
    "QueueItem",
    "QueueResponse",
    "Scanner",
    "ScanReport",
    "ScanState",
    "build_report",
    "ConfigError",
    "RenderError",
    "RenderTimeout",
    "ScannerError",
    "SetupError",
    "open_targets",
]
