import io

import pytest
from rich.console import Console

from browserkit import config, launchers


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep the user's config file and BROWSERKIT_* variables out of every test."""
    monkeypatch.setattr(config, "CONFIG_FILE", tmp_path / "config.json")
    for name in (
        config.ENV_LAUNCH_MODE,
        config.ENV_RAISE_ON_FAILURE,
        config.ENV_QUIET,
        config.ENV_DISABLE_UPDATE_CHECK,
    ):
        monkeypatch.delenv(name, raising=False)


class FakePopen:
    """Stands in for subprocess.Popen and records every spawned process."""

    calls: list["FakePopen"] = []
    exit_code = 0

    def __init__(self, args, **kwargs):
        self.args = args
        self.kwargs = kwargs
        self.input = None
        self.returncode = None
        FakePopen.calls.append(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False

    def wait(self):
        self.returncode = FakePopen.exit_code
        return self.returncode

    def communicate(self, input=None):
        self.input = input
        self.returncode = FakePopen.exit_code
        return None, None


@pytest.fixture
def fake_popen(monkeypatch):
    FakePopen.calls = []
    FakePopen.exit_code = 0
    monkeypatch.setattr(launchers.subprocess, "Popen", FakePopen)
    return FakePopen


@pytest.fixture
def console_output():
    return io.StringIO()


@pytest.fixture
def console(console_output):
    return Console(file=console_output, width=200)
