"""
Fetch-target setup: one renderer + HTTP session per configured device,
or a single default target when no device is configured.

Browsers are launched lazily, once per engine, and torn down through the
caller's ``ExitStack``.
"""

import subprocess
import sys
from contextlib import ExitStack
from typing import Any, Callable

import requests
from playwright.sync_api import Browser, Playwright, sync_playwright
from playwright.sync_api import Error as PlaywrightError

from site_scanner.config import BROWSER_ENGINES, Device, ScanConfig
from site_scanner.core.dispatcher import FetchTarget
from site_scanner.errors import SetupError
from site_scanner.rendering import PlaywrightRenderer, Renderer, StaticRenderer
from site_scanner.session import build_session
from site_scanner.utils.log import log


class BrowserLauncher:
    """Starts Playwright on first use and keeps one browser per engine."""

    def __init__(self, launch_options: dict[str, Any], stack: ExitStack) -> None:
        self.launch_options = launch_options
        self._stack = stack
        self._playwright: Playwright | None = None
        self._browsers: dict[str, Browser] = {}

    def get(self, engine: str) -> Browser:
        if engine in self._browsers:
            return self._browsers[engine]
        if self._playwright is None:
            self._playwright = self._stack.enter_context(sync_playwright())
        browser = getattr(self._playwright, engine).launch(**self.launch_options)
        self._stack.callback(browser.close)
        self._browsers[engine] = browser
        log.info("[SETUP] Launched %s %s", engine, browser.version)
        return browser


RendererFactory = Callable[
    [str, ScanConfig, "Device | None", requests.Session, BrowserLauncher], Renderer
]


def _browser_renderer(
    engine: str,
    config: ScanConfig,
    device: Device | None,
    session: requests.Session,
    browsers: BrowserLauncher,
) -> Renderer:
    new_page_options = dict(device.new_page_options) if device else {}
    user_agent = device.user_agent if device else None
    user_agent = user_agent or config.user_agent
    if user_agent:
        new_page_options.setdefault("user_agent", user_agent)
    return PlaywrightRenderer(
        browsers.get(engine),
        engine,
        new_page_options=new_page_options,
        goto_options=device.goto_options if device else None,
        timeout_ms=(device and device.navigation_timeout_ms) or config.navigation_timeout_ms,
    )


def _static_renderer(
    engine: str,
    config: ScanConfig,
    device: Device | None,
    session: requests.Session,
    browsers: BrowserLauncher,
) -> Renderer:
    return StaticRenderer(
        session,
        timeout=(device and device.http_timeout) or config.http_timeout,
        user_agent=config.user_agent_for(device),
    )


RENDERER_FACTORIES: dict[str, RendererFactory] = {
    "chromium": _browser_renderer,
    "firefox": _browser_renderer,
    "webkit": _browser_renderer,
    "static": _static_renderer,
}


def open_targets(config: ScanConfig, stack: ExitStack) -> list[FetchTarget]:
    """Build every fetch target for *config*; resources are released by *stack*."""
    session = build_session(verify_ssl=config.verify_ssl, user_agent=config.user_agent)
    stack.callback(session.close)
    browsers = BrowserLauncher(config.launch_options, stack)

    targets: list[FetchTarget] = []
    devices: list[Device | None] = list(config.devices) or [None]
    for device in devices:
        engine = config.engine_for(device)
        try:
            renderer = RENDERER_FACTORIES[engine](engine, config, device, session, browsers)
        except PlaywrightError as exc:
            raise SetupError(f"Unable to set up {engine}: {exc}") from exc
        stack.callback(renderer.close)
        targets.append(FetchTarget(
            renderer=renderer,
            session=session,
            device=device,
            user_agent=config.user_agent_for(device),
            http_timeout=(device and device.http_timeout) or config.http_timeout,
            send_referer=device.send_referer if device else True,
        ))
        log.info("[SETUP] Fetch target %s: %s",
                 device.label if device else "default", engine)
    return targets


def browser_engines(config: ScanConfig) -> list[str]:
    """Browser engines the config needs, in a stable order."""
    devices: list[Device | None] = list(config.devices) or [None]
    return sorted({config.engine_for(d) for d in devices} & BROWSER_ENGINES)


def install_browsers(engines: list[str]) -> None:
    """Run ``playwright install`` for *engines*."""
    if not engines:
        return
    log.info("[SETUP] Installing Playwright browsers: %s", ", ".join(engines))
    result = subprocess.run(
        [sys.executable, "-m", "playwright", "install", *engines],
        check=False,
    )
    if result.returncode != 0:
        raise SetupError(f"playwright install exited with status {result.returncode}")
