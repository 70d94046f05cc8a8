"""Platform identification and the fixed per-platform sanitizing tables."""

import sys
from enum import Enum

from .errors import UnsupportedPlatformError


class Platform(str, Enum):
    WINDOWS = "windows"
    LINUX = "linux"
    FREEBSD = "freebsd"
    MACOS = "macos"


class LaunchMode(str, Enum):
    """How the opener is started.

    DIRECT passes the URL as a single argument to the opener program (or the
    native ShellExecuteW call on Windows), so no shell ever parses it.
    SHELL feeds `<verb> <url>` to a spawned shell as typed text. Character
    filtering reduces but does not remove the injection risk of this mode.
    """

    DIRECT = "direct"
    SHELL = "shell"


_UNIX_FORBIDDEN = frozenset("\n\r|&;\\`$<>\"")

FORBIDDEN_CHARACTERS: dict[Platform, frozenset[str]] = {
    Platform.WINDOWS: frozenset("\n\r|&^<>\""),
    Platform.LINUX: _UNIX_FORBIDDEN,
    Platform.FREEBSD: _UNIX_FORBIDDEN,
    Platform.MACOS: frozenset("\n\r|&;\\`$"),
}

# Separator placed between query pairs when the URL is typed into a shell
_SHELL_SEPARATORS: dict[Platform, str] = {
    Platform.WINDOWS: "^&",
    Platform.LINUX: "\\&",
    Platform.FREEBSD: "\\&",
    Platform.MACOS: "\\&",
}


def detect_platform(system: str | None = None) -> Platform:
    """
    Identify the running platform.

    Args:
        system: A `sys.platform` style identifier. Defaults to the running interpreter's.

    Raises:
        UnsupportedPlatformError: If the platform is not Windows, Linux, FreeBSD or macOS.
    """
    system = sys.platform if system is None else system
    if system in ("win32", "cygwin"):
        return Platform.WINDOWS
    if system.startswith("linux"):
        return Platform.LINUX
    if system.startswith("freebsd"):
        return Platform.FREEBSD
    if system == "darwin":
        return Platform.MACOS
    raise UnsupportedPlatformError(system)


def forbidden_characters(platform: Platform) -> frozenset[str]:
    """Characters stripped from every string that ends up on the opener's command line."""
    return FORBIDDEN_CHARACTERS[platform]


def query_separator(platform: Platform, mode: LaunchMode) -> str:
    """Separator between query pairs for the given platform and launch mode."""
    if mode == LaunchMode.SHELL:
        return _SHELL_SEPARATORS[platform]
    return "&"
