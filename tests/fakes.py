"""
Test doubles for the rendering and HTTP collaborators.
"""

from unittest.mock import MagicMock

import requests
from urllib3 import HTTPHeaderDict

from site_scanner.core.dispatcher import FetchTarget
from site_scanner.rendering.base import Renderer, RenderResult


class FakeRenderer(Renderer):
    """Serves canned pages.

    *pages* maps a URL to ``(status, {(tag, attribute): [values]})``;
    unknown URLs render as an empty 200 page.  *failures* maps a URL to
    the exception ``navigate`` raises for it.
    """

    engine = "fake"

    def __init__(self, pages=None, failures=None):
        self.pages = pages or {}
        self.failures = failures or {}
        self.calls = []
        self.closed = False

    def navigate(self, url, referer=None):
        self.calls.append((url, referer))
        if url in self.failures:
            raise self.failures[url]
        status, links = self.pages.get(url, (200, {}))
        return RenderResult(
            status=status,
            status_text=None,
            headers={"content-type": "text/html"},
            timing={"responseEnd": 12.5},
            body_size=512,
            document=links,
        )

    def query_attributes(self, document, tag, attribute):
        return list(document.get((tag, attribute), []))

    def close(self):
        self.closed = True


def fake_response(status=200, reason="OK", headers=None):
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status
    resp.reason = reason
    raw = MagicMock()
    raw.headers = HTTPHeaderDict()
    for name, value in (headers or []):
        raw.headers.add(name, value)
    resp.raw = raw
    return resp


def fake_session(responses=None, default_status=200):
    """``requests.Session`` stand-in whose ``get`` serves *responses*.

    Values are either a response from ``fake_response`` or an exception
    instance to raise.
    """
    responses = responses or {}
    session = MagicMock(spec=requests.Session)

    def _get(url, **kwargs):
        result = responses.get(url)
        if result is None:
            return fake_response(status=default_status)
        if isinstance(result, BaseException):
            raise result
        return result

    session.get.side_effect = _get
    return session


def make_target(renderer=None, session=None, device=None, **kwargs):
    return FetchTarget(
        renderer=renderer if renderer is not None else FakeRenderer(),
        session=session if session is not None else fake_session(),
        device=device,
        **kwargs,
    )
