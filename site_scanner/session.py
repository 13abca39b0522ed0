"""
HTTP session creation for metadata-only fetches and the static renderer.

Failed requests are never retried; each attempt is recorded on the queue
item as-is.
"""

import requests
from requests.adapters import HTTPAdapter

from site_scanner.config import DEFAULT_USER_AGENT


def build_session(verify_ssl: bool = True, user_agent: str | None = None) -> requests.Session:
    """Return a pooled ``requests.Session`` with retries disabled."""
    session = requests.Session()
    adapter = HTTPAdapter(
        max_retries=0,
        pool_connections=10,
        pool_maxsize=10,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = verify_ssl
    session.headers.update({
        "User-Agent": user_agent or DEFAULT_USER_AGENT,
        "Accept-Encoding": "gzip, deflate",
        "Connection": "keep-alive",
    })
    return session
