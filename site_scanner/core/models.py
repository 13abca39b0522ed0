"""
Queue data model: items discovered during a scan and the responses
recorded for them.
"""

import enum
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _seconds(value: timedelta | None) -> float | None:
    return value.total_seconds() if value is not None else None


class ItemKind(enum.Enum):
    """How a discovered URL is fetched."""

    RESOURCE = "resource"   # same-origin page reached through a hyperlink
    ASSET = "asset"         # same-origin script, stylesheet or image
    EXTERNAL = "external"   # different origin


@dataclass
class QueueResponse:
    """Outcome of one successful round-trip against one fetch target."""

    source_id: str | None = None
    status_code: int | None = None
    status_text: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    response_time_ms: float | None = None
    content_length: int | None = None
    timing: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_id": self.source_id,
            "status_code": self.status_code,
            "status_text": self.status_text,
            "headers": dict(self.headers),
            "response_time_ms": self.response_time_ms,
            "content_length": self.content_length,
            "timing": self.timing,
        }


@dataclass(eq=False)
class QueueItem:
    """One unique resolved URL seen during the scan.

    ``url``, ``kind`` and ``id`` never change after creation.  The
    dispatcher fills in the timestamps, ``responses`` and ``errors`` and,
    for resources, ``links``.
    """

    url: str
    kind: ItemKind = ItemKind.RESOURCE
    discovered_from: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=utc_now)
    started_at: datetime | None = None
    ended_at: datetime | None = None
    duration: timedelta | None = None
    links: list[str] | None = None
    responses: list[QueueResponse] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def processed(self) -> bool:
        return self.started_at is not None

    def add_link(self, url: str) -> bool:
        """Record an outgoing link; returns False if it was already listed."""
        if self.links is None:
            self.links = []
        if url in self.links:
            return False
        self.links.append(url)
        return True

    def status_codes(self) -> list[int]:
        """Distinct status codes across all responses, in response order."""
        codes: list[int] = []
        for resp in self.responses:
            if resp.status_code is not None and resp.status_code not in codes:
                codes.append(resp.status_code)
        return codes

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "url": self.url,
            "kind": self.kind.value,
            "discovered_from": self.discovered_from,
            "created_at": _iso(self.created_at),
            "started_at": _iso(self.started_at),
            "ended_at": _iso(self.ended_at),
            "duration": _seconds(self.duration),
            "links": list(self.links) if self.links is not None else None,
            "responses": [r.to_dict() for r in self.responses],
            "errors": list(self.errors),
        }
