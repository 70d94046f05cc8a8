"""Open http(s) URLs in the user's default browser, with sanitized query parameters."""

__pkg_version__ = "0.1.0"

from .browser import BrowserHandler, open_url  # noqa: E402
from .errors import (  # noqa: E402
    BrowserError,
    DisposedError,
    KeyCollisionError,
    LaunchFailedError,
    MalformedURLError,
    UnsupportedPlatformError,
)
from .platforms import LaunchMode, Platform  # noqa: E402

__all__ = [
    "BrowserHandler",
    "open_url",
    "BrowserError",
    "DisposedError",
    "KeyCollisionError",
    "LaunchFailedError",
    "MalformedURLError",
    "UnsupportedPlatformError",
    "LaunchMode",
    "Platform",
]
