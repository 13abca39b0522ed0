"""
Configuration for the site scanner.

Module-level defaults plus the ``ScanConfig`` / ``Device`` dataclasses
that are loaded from the optional JSON config file.
"""

import dataclasses
import json
import os
import urllib.parse
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from site_scanner.errors import ConfigError
from site_scanner.utils.url import canonical_url

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
APP_NAME = "site-scanner"
APP_VERSION = "0.1.0"
DEFAULT_USER_AGENT = f"{APP_NAME}/{APP_VERSION}"

DEFAULT_RENDERING_ENGINE = "chromium"
DEFAULT_NAVIGATION_TIMEOUT_MS = 30_000
DEFAULT_HTTP_TIMEOUT = 30.0          # seconds, metadata-only fetches

# Engines that drive a real browser through Playwright
BROWSER_ENGINES = frozenset({"chromium", "firefox", "webkit"})
# "static" renders with requests + BeautifulSoup, no JavaScript
RENDERING_ENGINES = BROWSER_ENGINES | {"static"}

# ---------------------------------------------------------------------------
# Report layout
# ---------------------------------------------------------------------------
REPORTS_DIRNAME = "reports"
REPORT_TIMESTAMP_FORMAT = "%Y-%m-%d-%H-%M-%S"
SCAN_REPORT_FILE = "scan.json"
QUEUE_REPORT_FILE = "queue.json"
CONFIG_REPORT_FILE = "config.json"


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def _check_timeouts(where: str, *timeouts: Any) -> None:
    for timeout in timeouts:
        if not isinstance(timeout, (int, float)) or isinstance(timeout, bool):
            raise ConfigError(f"{where}: timeouts must be numbers, got {timeout!r}")
        if timeout <= 0:
            raise ConfigError(f"{where}: timeouts must be positive, got {timeout!r}")


def _check_optional_str(where: str, name: str, value: Any) -> None:
    if value is not None and not isinstance(value, str):
        raise ConfigError(f"{where}: {name} must be a string")


@dataclass
class Device:
    """One fetch target: a rendering profile plus its HTTP options."""

    name: str | None = None
    rendering_engine: str | None = None
    user_agent: str | None = None
    new_page_options: dict[str, Any] = field(default_factory=dict)
    goto_options: dict[str, Any] = field(default_factory=dict)
    navigation_timeout_ms: int | None = None
    http_timeout: float | None = None
    send_referer: bool = True
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def label(self) -> str:
        return self.name or self.id[:8]

    def validate(self, where: str = "device") -> None:
        """Raise ``ConfigError`` unless every field has a usable type."""
        if not isinstance(self.id, str) or not self.id:
            raise ConfigError(f"{where}: id must be a non-empty string")
        for name in ("name", "rendering_engine", "user_agent"):
            _check_optional_str(where, name, getattr(self, name))
        if not isinstance(self.new_page_options, dict) or not isinstance(self.goto_options, dict):
            raise ConfigError(f"{where}: page and goto options must be objects")
        timeouts = [t for t in (self.http_timeout, self.navigation_timeout_ms) if t is not None]
        _check_timeouts(where, *timeouts)
        if not isinstance(self.send_referer, bool):
            raise ConfigError(f"{where}: send_referer must be true or false")

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass
class ScanConfig:
    """Effective configuration for one scan."""

    report_path: Path = field(default_factory=Path.cwd)
    rendering_engine: str = DEFAULT_RENDERING_ENGINE
    launch_options: dict[str, Any] = field(default_factory=dict)
    user_agent: str | None = None
    navigation_timeout_ms: int = DEFAULT_NAVIGATION_TIMEOUT_MS
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    verify_ssl: bool = True
    devices: list[Device] = field(default_factory=list)

    @property
    def target_count(self) -> int:
        """Number of fetch targets every item is fetched against."""
        return len(self.devices) or 1

    def engine_for(self, device: Device | None) -> str:
        if device is not None and device.rendering_engine:
            return device.rendering_engine
        return self.rendering_engine

    def user_agent_for(self, device: Device | None) -> str:
        """User-Agent for metadata fetches made on behalf of *device*."""
        if device is not None:
            ua = device.user_agent or device.new_page_options.get("user_agent")
            if ua:
                return ua
        return self.user_agent or DEFAULT_USER_AGENT

    def validate(self) -> None:
        """Raise ``ConfigError`` unless the config can be used for a scan."""
        if not self.report_path.is_dir():
            raise ConfigError(f"Report path {self.report_path} is invalid.")
        if not os.access(self.report_path, os.W_OK):
            raise ConfigError(f"Report path {self.report_path} is not writable.")
        _check_timeouts("config", self.http_timeout, self.navigation_timeout_ms)
        if not isinstance(self.verify_ssl, bool):
            raise ConfigError("config: verify_ssl must be true or false")
        if not isinstance(self.rendering_engine, str):
            raise ConfigError("config: rendering_engine must be a string")
        _check_optional_str("config", "user_agent", self.user_agent)

        seen: set[str] = set()
        for i, device in enumerate(self.devices):
            where = f"devices[{i}]"
            device.validate(where)
            if device.id in seen:
                raise ConfigError(f"{where}: duplicate device id {device.id}")
            seen.add(device.id)

        engines = {self.rendering_engine}
        engines.update(d.rendering_engine for d in self.devices if d.rendering_engine)
        unknown = engines - RENDERING_ENGINES
        if unknown:
            raise ConfigError(
                f"Unknown rendering engine(s): {', '.join(sorted(unknown))} "
                f"(expected one of {', '.join(sorted(RENDERING_ENGINES))})"
            )

    def to_dict(self) -> dict[str, Any]:
        data = dataclasses.asdict(self)
        data["report_path"] = str(self.report_path)
        return data


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def _build(cls, raw: Any, where: str):
    """Instantiate dataclass *cls* from a JSON object, rejecting unknown keys."""
    if not isinstance(raw, dict):
        raise ConfigError(f"{where}: expected an object, got {type(raw).__name__}")
    known = {f.name for f in dataclasses.fields(cls)}
    unknown = set(raw) - known
    if unknown:
        raise ConfigError(f"{where}: unknown key(s) {', '.join(sorted(unknown))}")
    try:
        return cls(**raw)
    except TypeError as exc:
        raise ConfigError(f"{where}: {exc}") from exc


def config_from_dict(raw: dict[str, Any]) -> ScanConfig:
    if not isinstance(raw, dict):
        raise ConfigError("config: expected an object at the top level")
    raw = dict(raw)
    devices = raw.pop("devices", [])
    if not isinstance(devices, list):
        raise ConfigError("devices: expected a list")
    config = _build(ScanConfig, raw, "config")
    config.devices = [
        _build(Device, d, f"devices[{i}]") for i, d in enumerate(devices)
    ]
    if not isinstance(config.report_path, (str, Path)):
        raise ConfigError("config: report_path must be a string")
    config.report_path = Path(config.report_path)
    if not isinstance(config.launch_options, dict):
        raise ConfigError("config: launch_options must be an object")
    return config


def load_config(path: str | Path | None = None) -> ScanConfig:
    """Load and validate a JSON config file (defaults when *path* is None)."""
    if path is None:
        config = ScanConfig()
    else:
        path = Path(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigError(f"Unable to read {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Unable to parse {path} to valid config: {exc}") from exc
        config = config_from_dict(raw)
    config.validate()
    return config


def parse_seed_url(raw: str) -> str:
    """Return *raw* as an absolute http(s) URL or raise ``ConfigError``."""
    raw = raw.strip()
    if "://" not in raw:
        raw = "https://" + raw
    parsed = urllib.parse.urlparse(raw)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise ConfigError(f"Unable to parse {raw} to valid URL.")
    return canonical_url(raw)
