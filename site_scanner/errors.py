"""Exception types raised by the scanner."""


class ScannerError(Exception):
    """Base class for every error raised by ``site_scanner``."""


class ConfigError(ScannerError):
    """Invalid seed URL, config file or report path.

    Raised before any scanning starts.
    """


class RenderError(ScannerError):
    """The rendering engine could not produce a response."""


class RenderTimeout(RenderError):
    """Navigation did not finish before the configured deadline."""


class SetupError(ScannerError):
    """A fetch target (browser, page) could not be prepared."""
