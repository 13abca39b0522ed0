"""
Rendering collaborator interface.

A renderer loads a URL the way a browser would and lets the caller query
the resulting document for attribute values.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class RenderResult:
    status: int | None
    status_text: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    timing: Any = None
    body_size: int | None = None
    document: Any = None


class Renderer(ABC):
    """One configured rendering engine (browser page or static parser)."""

    engine: str = ""

    @abstractmethod
    def navigate(self, url: str, referer: str | None = None) -> RenderResult:
        """Load *url*.

        Raises ``RenderTimeout`` when the navigation deadline passes and
        ``RenderError`` (or a transport exception) on any other failure.
        """

    @abstractmethod
    def query_attributes(self, document: Any, tag: str, attribute: str) -> list[str]:
        """Values of *attribute* on every *tag* element carrying it.

        Never raises; a failed query yields an empty list.
        """

    def close(self) -> None:
        pass
