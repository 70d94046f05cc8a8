# browserkit/config.py
"""Configuration management for browserkit.

Settings are read from ~/.config/browserkit/config.json when it exists and
can be overridden per process through environment variables:

    BROWSERKIT_LAUNCH_MODE: "direct" (default) or "shell".
    BROWSERKIT_RAISE_ON_FAILURE: Raise LaunchFailedError on a non-zero opener exit code.
    BROWSERKIT_QUIET: Suppress launch failure warnings.
    BROWSERKIT_DISABLE_UPDATE_CHECK: Skip the PyPI version check in the CLI.

Boolean variables accept "1", "true" or "yes".
"""

import json
import os
import pathlib
import stat
import sys

from pydantic import BaseModel, ValidationError

from .platforms import LaunchMode


CONFIG_DIR = pathlib.Path.home() / ".config" / "browserkit"
CONFIG_FILE = CONFIG_DIR / "config.json"

ENV_LAUNCH_MODE = "BROWSERKIT_LAUNCH_MODE"
ENV_RAISE_ON_FAILURE = "BROWSERKIT_RAISE_ON_FAILURE"
ENV_QUIET = "BROWSERKIT_QUIET"
ENV_DISABLE_UPDATE_CHECK = "BROWSERKIT_DISABLE_UPDATE_CHECK"


class Settings(BaseModel):
    """User settings. None of these can be changed per open_url call."""

    launch_mode: LaunchMode = LaunchMode.DIRECT
    raise_on_failure: bool = False  # Otherwise a failed launch returns False and warns
    quiet: bool = False
    check_updates: bool = True


def _env_flag(name: str) -> bool | None:
    """Read a boolean flag from the environment, None when unset."""
    val = os.environ.get(name)
    if val is None:
        return None
    return val.strip().lower() in ("1", "true", "yes")


def _read_config_file(path: pathlib.Path) -> dict:
    if not path.exists():
        return {}
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (IOError, json.JSONDecodeError, OSError) as e:
        print(f"Warning: Unable to read config file at {path}: {e}", file=sys.stderr)
        return {}
    if not isinstance(data, dict):
        print(f"Warning: Ignoring config file at {path}: expected a JSON object.", file=sys.stderr)
        return {}
    return data


def load_settings(path: pathlib.Path | None = None) -> Settings:
    """Load settings from the config file, then apply environment overrides.

    Invalid values in the file are reported and replaced by the defaults.

    Args:
        path: Config file to read. Defaults to ~/.config/browserkit/config.json.
    """
    path = CONFIG_FILE if path is None else path
    data = _read_config_file(path)

    try:
        settings = Settings(**data)
    except ValidationError as e:
        print(f"Warning: Invalid settings in {path}, using defaults: {e}", file=sys.stderr)
        settings = Settings()

    overrides = {}
    launch_mode = os.environ.get(ENV_LAUNCH_MODE)
    if launch_mode:
        try:
            overrides["launch_mode"] = LaunchMode(launch_mode.strip().lower())
        except ValueError:
            print(f"Warning: Ignoring {ENV_LAUNCH_MODE}={launch_mode!r}, expected 'direct' or 'shell'.", file=sys.stderr)

    for env_name, field_name in ((ENV_RAISE_ON_FAILURE, "raise_on_failure"), (ENV_QUIET, "quiet")):
        flag = _env_flag(env_name)
        if flag is not None:
            overrides[field_name] = flag

    disable_updates = _env_flag(ENV_DISABLE_UPDATE_CHECK)
    if disable_updates is not None:
        overrides["check_updates"] = not disable_updates

    return settings.model_copy(update=overrides)


def save_settings(settings: Settings, path: pathlib.Path | None = None) -> None:
    """Write settings as JSON, readable by the owner only."""
    path = CONFIG_FILE if path is None else path
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(settings.model_dump(mode="json"), f, indent=4)
    # Set file permissions to read/write for owner only (600)
    try:
        os.chmod(path, stat.S_IRUSR | stat.S_IWUSR)
    except OSError as e:
        print(f"Warning: Could not set permissions on {path}: {e}", file=sys.stderr)
