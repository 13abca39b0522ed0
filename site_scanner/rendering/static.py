"""
Browser-less renderer: fetches the page with ``requests`` and parses it
with BeautifulSoup.  No JavaScript runs, so only server-sent markup is
seen.
"""

import requests
from bs4 import BeautifulSoup

from site_scanner.errors import RenderTimeout
from site_scanner.rendering.base import Renderer, RenderResult
from site_scanner.utils.log import log

_BS4_PARSER = "lxml"

# Content types parsed into a document
_MARKUP_TYPES = ("text/html", "application/xhtml+xml", "application/xml", "text/xml")


class StaticRenderer(Renderer):
    engine = "static"

    def __init__(
        self,
        session: requests.Session,
        timeout: float,
        user_agent: str | None = None,
    ) -> None:
        self.session = session
        self.timeout = timeout
        self.user_agent = user_agent

    def navigate(self, url: str, referer: str | None = None) -> RenderResult:
        headers = {"Accept": "text/html,application/xhtml+xml,*/*;q=0.8"}
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        if referer:
            headers["Referer"] = referer
        try:
            resp = self.session.get(
                url, headers=headers, timeout=self.timeout, allow_redirects=True
            )
        except requests.Timeout as exc:
            raise RenderTimeout(f"Timed out loading {url}: {exc}") from exc

        content = resp.content
        ct = resp.headers.get("Content-Type", "").split(";")[0].strip().lower()
        document = None
        if ct in _MARKUP_TYPES:
            document = BeautifulSoup(content, _BS4_PARSER)

        return RenderResult(
            status=resp.status_code,
            status_text=resp.reason or None,
            headers={k.lower(): v for k, v in resp.headers.items()},
            timing={"elapsed_ms": resp.elapsed.total_seconds() * 1000},
            body_size=len(content),
            document=document,
        )

    def query_attributes(self, document, tag: str, attribute: str) -> list[str]:
        if document is None:
            return []
        try:
            values = [el.get(attribute) for el in document.find_all(tag)]
        except Exception as exc:
            log.debug("Attribute query %s[%s] failed: %s", tag, attribute, exc)
            return []
        return [v for v in values if isinstance(v, str)]
