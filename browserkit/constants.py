# browserkit/constants.py
"""
Constants for the browserkit package.
"""

# Opener programs
UNIX_OPENER = "xdg-open"  # Linux and FreeBSD
MACOS_OPENER = "open"
WINDOWS_OPEN_VERB = "start"  # cmd.exe builtin, has no executable of its own

# Shells used by the typed-command launch mode
UNIX_SHELL = ("/bin/sh",)
WINDOWS_SHELL = ("cmd.exe", "/Q", "/D")

# ShellExecuteW returns a value greater than this on success
SHELL_EXECUTE_SUCCESS_THRESHOLD = 32
SW_SHOWNORMAL = 1  # nShowCmd passed to ShellExecuteW

ALLOWED_SCHEMES = ("http", "https")

# Update check
PYPI_URL = "https://pypi.org/pypi/browserkit/json"
UPDATE_CHECK_TIMEOUT = 5  # Seconds, the check is non-critical
