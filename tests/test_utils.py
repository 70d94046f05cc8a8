import pytest
import requests

from browserkit import __pkg_version__, utils


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


@pytest.fixture
def pypi(monkeypatch):
    state = {"response": FakeResponse({"info": {"version": __pkg_version__}})}

    def fake_get(url, timeout=None):
        if isinstance(state["response"], Exception):
            raise state["response"]
        return state["response"]

    monkeypatch.setattr(utils.requests, "get", fake_get)
    return state


def test_newer_version_is_reported(pypi, console, console_output):
    pypi["response"] = FakeResponse({"info": {"version": "999.0.0"}})

    assert utils.check_for_updates(console) == "999.0.0"
    assert "New browserkit version (999.0.0) available" in console_output.getvalue()


@pytest.mark.parametrize("version", [__pkg_version__, "0.0.1"])
def test_current_or_older_version_is_silent(pypi, console, console_output, version):
    pypi["response"] = FakeResponse({"info": {"version": version}})

    assert utils.check_for_updates(console) is None
    assert console_output.getvalue() == ""


@pytest.mark.parametrize(
    "response",
    [
        requests.exceptions.ConnectionError("offline"),
        FakeResponse({}, status_code=503),
        FakeResponse({"unexpected": True}),
        FakeResponse({"info": {"version": "not a version!"}}),
    ],
)
def test_failures_are_silent(pypi, console, console_output, response):
    pypi["response"] = response

    assert utils.check_for_updates(console) is None
    assert console_output.getvalue() == ""
