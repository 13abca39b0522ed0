"""HTTP status and header helpers shared by both fetch strategies."""

from http import HTTPStatus
from typing import Any


def status_text(status_code: int | None) -> str | None:
    """Standard reason phrase for *status_code*, ``None`` when unknown."""
    if status_code is None:
        return None
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return None


def first_header_values(headers: Any) -> dict[str, str]:
    """
    Flatten a multi-valued header mapping to one value per name.

    Only the first value is kept.  *headers* is either a urllib3
    ``HTTPHeaderDict`` (has ``getlist``) or a plain mapping.
    """
    if hasattr(headers, "getlist"):
        flat: dict[str, str] = {}
        for name in headers:
            if name in flat:
                continue
            values = headers.getlist(name)
            if values:
                flat[name] = values[0]
        return flat
    return {name: value for name, value in headers.items()}
