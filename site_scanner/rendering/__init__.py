"""Rendering engines: one ``Renderer`` implementation per engine family."""

from site_scanner.rendering.base import Renderer, RenderResult
from site_scanner.rendering.browser import PlaywrightRenderer
from site_scanner.rendering.static import StaticRenderer

__all__ = ["Renderer", "RenderResult", "PlaywrightRenderer", "StaticRenderer"]
