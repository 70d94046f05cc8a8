"""Exception types for browserkit.

Every error raised by the library derives from BrowserError so host programs
can catch the whole family in one place. Errors carry an optional suggestion
which the CLI prints beneath the message.
"""

from rich.console import Console
from rich.markup import escape


class BrowserError(Exception):
    """Base class for all browserkit errors."""

    def __init__(self, message: str, suggestion: str | None = None):
        self.message = message
        self.suggestion = suggestion
        super().__init__(message)


class MalformedURLError(BrowserError, ValueError):
    """Raised when a URL does not parse as an absolute http(s) URI."""

    pass


class KeyCollisionError(BrowserError, ValueError):
    """Raised when two query keys become identical after conversion and filtering."""

    def __init__(self, key: str):
        super().__init__(
            f"Query parameter key {key!r} occurs more than once after filtering.",
            suggestion="Make sure every query key is unique once converted to text.",
        )
        self.key = key


class UnsupportedPlatformError(BrowserError):
    """Raised when the running OS is not Windows, Linux, FreeBSD or macOS."""

    def __init__(self, platform: str):
        super().__init__(f"Opening URLs is not supported on platform {platform!r}.")
        self.platform = platform


class DisposedError(BrowserError):
    """Raised when a closed BrowserHandler is used."""

    def __init__(self):
        super().__init__("BrowserHandler has already been closed.")


class LaunchFailedError(BrowserError):
    """Raised when the browser could not be launched.

    exit_code is None when the opener process never started.
    """

    def __init__(self, url: str, exit_code: int | None = None, reason: str | None = None):
        if exit_code is None:
            message = f"Could not launch a browser for [{url}]" + (f": {reason}" if reason else ".")
        else:
            message = f"Opening [{url}] failed with non-zero exit code [{exit_code}]."
        super().__init__(message)
        self.url = url
        self.exit_code = exit_code


def print_error(error: BrowserError, console: Console) -> None:
    """Print a browserkit error in a user-friendly format."""
    console.print(f"[bold red]Error:[/] {escape(error.message)}", highlight=False)
    if error.suggestion:
        console.print(f"[dim]{escape(error.suggestion)}[/]")
