"""
Playwright-backed renderer for the chromium, firefox and webkit engines.
"""

from typing import Any

from playwright.sync_api import Browser, Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from site_scanner.errors import RenderError, RenderTimeout
from site_scanner.rendering.base import Renderer, RenderResult
from site_scanner.utils.log import log

_ATTRIBUTE_JS = "(elements, name) => elements.map(e => e.getAttribute(name))"


class PlaywrightRenderer(Renderer):
    """Renders pages in one browser page, reused for every navigation."""

    def __init__(
        self,
        browser: Browser,
        engine: str,
        new_page_options: dict[str, Any] | None = None,
        goto_options: dict[str, Any] | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        self.engine = engine
        self.goto_options = dict(goto_options or {})
        if timeout_ms is not None:
            self.goto_options.setdefault("timeout", timeout_ms)
        self.page = browser.new_page(**(new_page_options or {}))

    def navigate(self, url: str, referer: str | None = None) -> RenderResult:
        options = dict(self.goto_options)
        if referer:
            options["referer"] = referer
        try:
            response = self.page.goto(url, **options)
        except PlaywrightTimeoutError as exc:
            raise RenderTimeout(str(exc)) from exc
        if response is None:
            raise RenderError(f"Unable to get a response from {url}")

        try:
            body_size = len(response.body())
        except PlaywrightError as exc:
            # Redirect responses and some cached loads have no body
            log.debug("No body for %s: %s", url, exc)
            body_size = None

        return RenderResult(
            status=response.status,
            status_text=response.status_text or None,
            headers=response.all_headers(),
            timing=response.request.timing,
            body_size=body_size,
            document=self.page,
        )

    def query_attributes(self, document, tag: str, attribute: str) -> list[str]:
        try:
            values = document.locator(f"{tag}[{attribute}]").evaluate_all(
                _ATTRIBUTE_JS, attribute
            )
        except PlaywrightError as exc:
            log.debug("Attribute query %s[%s] failed: %s", tag, attribute, exc)
            return []
        return [v for v in values if isinstance(v, str)]

    def close(self) -> None:
        try:
            self.page.close()
        except PlaywrightError as exc:
            log.debug("Closing %s page failed: %s", self.engine, exc)
