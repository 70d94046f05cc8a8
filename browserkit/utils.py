import requests
from packaging.version import parse as parse_version
from rich.console import Console

from .constants import PYPI_URL, UPDATE_CHECK_TIMEOUT


# Update Check Function
def check_for_updates(console: Console) -> str | None:
    """Checks PyPI for a newer version of browserkit and notifies the user.

    Returns:
        The newer version string if one is available, otherwise None.
    """
    from . import __pkg_version__

    try:
        response = requests.get(PYPI_URL, timeout=UPDATE_CHECK_TIMEOUT)
        response.raise_for_status()
        latest_version_str = response.json()["info"]["version"]

        if parse_version(latest_version_str) <= parse_version(__pkg_version__):
            return None
    except requests.exceptions.RequestException:
        # Network errors must not disrupt the user
        return None
    except (KeyError, TypeError, ValueError):
        # Unexpected PyPI response format, or an unparseable version
        return None

    console.print(
        f"[yellow]WARNING: New browserkit version ({latest_version_str}) available "
        f"(you have {__pkg_version__}). Run: pip install --upgrade browserkit[/]"
    )
    return latest_version_str
