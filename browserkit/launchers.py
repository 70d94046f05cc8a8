"""
Platform launchers: the mechanisms that hand a finished URL to the OS.

Each launcher blocks until the opener exits (or the native call returns)
and reports an exit status, 0 meaning success.
"""

import ctypes
import subprocess
from abc import ABC, abstractmethod
from typing import Callable

from .constants import (
    MACOS_OPENER,
    SHELL_EXECUTE_SUCCESS_THRESHOLD,
    SW_SHOWNORMAL,
    UNIX_OPENER,
    UNIX_SHELL,
    WINDOWS_OPEN_VERB,
    WINDOWS_SHELL,
)
from .platforms import LaunchMode, Platform


class Launcher(ABC):
    """Starts the default browser pointed at a URL."""

    @abstractmethod
    def launch(self, url: str) -> int:
        """Open url and wait for the opener to finish. Returns its exit status."""
        pass


class ExecutableLauncher(Launcher):
    """Runs an opener program with the URL as its only argument. No shell is involved."""

    def __init__(self, command: str):
        self.command = command

    def launch(self, url: str) -> int:
        with subprocess.Popen([self.command, url], stdin=subprocess.DEVNULL) as process:
            return process.wait()

    def __repr__(self) -> str:
        return f"ExecutableLauncher({self.command!r})"


class ShellLauncher(Launcher):
    """Spawns a shell and types `<verb> <url>` into it.

    The URL is parsed by the shell, so only filtered URLs may be passed here.
    """

    def __init__(self, shell: tuple[str, ...], verb: str):
        self.shell = shell
        self.verb = verb

    def launch(self, url: str) -> int:
        with subprocess.Popen(list(self.shell), stdin=subprocess.PIPE, text=True) as process:
            process.communicate(f"{self.verb} {url}\n")
            return process.returncode

    def __repr__(self) -> str:
        return f"ShellLauncher({self.shell!r}, {self.verb!r})"


class ShellExecuteLauncher(Launcher):
    """Calls the Windows ShellExecuteW API with the URL as target."""

    def launch(self, url: str) -> int:
        windll = getattr(ctypes, "windll", None)
        if windll is None:
            raise OSError("ShellExecuteW is only available on Windows")
        result = windll.shell32.ShellExecuteW(None, None, url, None, None, SW_SHOWNORMAL)
        return 0 if result > SHELL_EXECUTE_SUCCESS_THRESHOLD else 1

    def __repr__(self) -> str:
        return "ShellExecuteLauncher()"


_LAUNCHERS: dict[tuple[Platform, LaunchMode], Callable[[], Launcher]] = {
    (Platform.WINDOWS, LaunchMode.DIRECT): ShellExecuteLauncher,
    (Platform.WINDOWS, LaunchMode.SHELL): lambda: ShellLauncher(WINDOWS_SHELL, WINDOWS_OPEN_VERB),
    (Platform.LINUX, LaunchMode.DIRECT): lambda: ExecutableLauncher(UNIX_OPENER),
    (Platform.LINUX, LaunchMode.SHELL): lambda: ShellLauncher(UNIX_SHELL, UNIX_OPENER),
    (Platform.FREEBSD, LaunchMode.DIRECT): lambda: ExecutableLauncher(UNIX_OPENER),
    (Platform.FREEBSD, LaunchMode.SHELL): lambda: ShellLauncher(UNIX_SHELL, UNIX_OPENER),
    (Platform.MACOS, LaunchMode.DIRECT): lambda: ExecutableLauncher(MACOS_OPENER),
    (Platform.MACOS, LaunchMode.SHELL): lambda: ShellLauncher(UNIX_SHELL, MACOS_OPENER),
}


def get_launcher(platform: Platform, mode: LaunchMode = LaunchMode.DIRECT) -> Launcher:
    """Return the launcher for a platform and launch mode."""
    return _LAUNCHERS[(Platform(platform), LaunchMode(mode))]()
