"""
Per-item fetch strategies.

``RESOURCE`` items are rendered (and their links extracted); ``ASSET`` and
``EXTERNAL`` items get a metadata-only GET.  Each item is fetched once per
configured target, one target after another.  Failures are recorded on the
item and never propagate out of ``Dispatcher.process``.
"""

import time
import traceback
from dataclasses import dataclass
from typing import Callable

import requests

from site_scanner.config import DEFAULT_HTTP_TIMEOUT, DEFAULT_USER_AGENT, Device
from site_scanner.core.extractor import LinkExtractor
from site_scanner.core.frontier import Frontier
from site_scanner.core.models import ItemKind, QueueItem, QueueResponse, utc_now
from site_scanner.errors import RenderTimeout
from site_scanner.rendering.base import Renderer
from site_scanner.utils.http_meta import first_header_values, status_text
from site_scanner.utils.log import log


@dataclass
class FetchTarget:
    """A renderer and an HTTP session configured for one device profile."""

    renderer: Renderer
    session: requests.Session
    device: Device | None = None
    user_agent: str = DEFAULT_USER_AGENT
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    send_referer: bool = True

    @property
    def source_id(self) -> str | None:
        return self.device.id if self.device is not None else None

    @property
    def label(self) -> str:
        return self.device.label if self.device is not None else "default"

    def close(self) -> None:
        self.renderer.close()


def _elapsed_ms(start: float) -> float:
    return round((time.monotonic() - start) * 1000, 3)


class Dispatcher:
    def __init__(
        self,
        frontier: Frontier,
        targets: list[FetchTarget],
        extractor: LinkExtractor | None = None,
    ) -> None:
        if not targets:
            raise ValueError("at least one fetch target is required")
        self.frontier = frontier
        self.targets = targets
        self.extractor = extractor if extractor is not None else LinkExtractor(frontier)

    @property
    def target_count(self) -> int:
        return len(self.targets)

    def process(self, item: QueueItem) -> None:
        """Fetch *item* against every target, recording results and errors."""
        fetch: Callable[[QueueItem, FetchTarget], QueueResponse]
        if item.kind is ItemKind.RESOURCE:
            fetch = self._render
        else:
            fetch = self._fetch_metadata

        for target in self.targets:
            try:
                response = fetch(item, target)
            except (requests.Timeout, RenderTimeout):
                item.errors.append(self._prefix(target, self._timeout_message(item)))
                log.debug("[TIMEOUT] %s (%s)", item.url, target.label)
            except Exception:
                item.errors.append(self._prefix(target, traceback.format_exc()))
                log.debug("[ERR] %s (%s)", item.url, target.label, exc_info=True)
            else:
                item.responses.append(response)

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def _fetch_metadata(self, item: QueueItem, target: FetchTarget) -> QueueResponse:
        """GET without reading the body; status and headers only."""
        headers = {
            "accept": "*/*",
            "user-agent": target.user_agent,
        }
        referer = self._referer(item, target)
        if referer:
            headers["referer"] = referer

        start = time.monotonic()
        resp = target.session.get(
            item.url,
            headers=headers,
            timeout=target.http_timeout,
            allow_redirects=True,
            stream=True,
        )
        try:
            elapsed = _elapsed_ms(start)
            raw_headers = resp.raw.headers if resp.raw is not None else resp.headers
            return QueueResponse(
                source_id=target.source_id,
                status_code=resp.status_code,
                status_text=resp.reason or status_text(resp.status_code),
                headers=first_header_values(raw_headers),
                response_time_ms=elapsed,
            )
        finally:
            resp.close()

    def _render(self, item: QueueItem, target: FetchTarget) -> QueueResponse:
        """Render the page, then extract its links."""
        start = time.monotonic()
        result = target.renderer.navigate(item.url, referer=self._referer(item, target))
        elapsed = _elapsed_ms(start)

        response = QueueResponse(
            source_id=target.source_id,
            status_code=result.status,
            status_text=result.status_text or status_text(result.status),
            headers=dict(result.headers),
            response_time_ms=elapsed,
            content_length=result.body_size,
            timing=result.timing,
        )
        self.extractor.extract(item, target.renderer, result.document)
        return response

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _referer(self, item: QueueItem, target: FetchTarget) -> str | None:
        if not target.send_referer:
            return None
        parent = self.frontier.get(item.discovered_from)
        return parent.url if parent is not None else None

    @staticmethod
    def _timeout_message(item: QueueItem) -> str:
        started = item.started_at or utc_now()
        elapsed = (utc_now() - started).total_seconds() * 1000
        return f"Timeout after {elapsed:.0f} milliseconds."

    def _prefix(self, target: FetchTarget, message: str) -> str:
        if len(self.targets) > 1:
            return f"[{target.label}] {message}"
        return message
