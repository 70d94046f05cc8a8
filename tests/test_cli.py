import pytest

from browserkit import browser, cli, config
from browserkit.platforms import Platform


@pytest.fixture(autouse=True)
def no_update_check(monkeypatch):
    monkeypatch.setenv(config.ENV_DISABLE_UPDATE_CHECK, "1")


@pytest.fixture
def on_linux(monkeypatch):
    monkeypatch.setattr(browser, "detect_platform", lambda: Platform.LINUX)


def run_cli(*argv):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(list(argv))
    return exc_info.value.code


@pytest.mark.parametrize(
    ("query_args", "expected"),
    [
        (None, []),
        ([], []),
        (["q=hello world"], [("q", "hello world")]),
        (["a=1", "b="], [("a", "1"), ("b", "")]),
        (["expr=x=y"], [("expr", "x=y")]),
        (["a=1", "a=2"], [("a", "1"), ("a", "2")]),
    ],
)
def test_parse_query_args(query_args, expected):
    assert cli.parse_query_args(query_args) == expected


@pytest.mark.parametrize("arg", ["novalue", "=value"])
def test_parse_query_args_rejects_bad_format(arg):
    with pytest.raises(ValueError):
        cli.parse_query_args([arg])


def test_url_command_prints_sanitized_url(capsys):
    code = run_cli("url", "https://www.example.com", "-p", "q=hello world", "-p", "x=a|b", "--platform", "linux")

    assert code == 0
    assert capsys.readouterr().out.strip() == "https://www.example.com?q=hello world&x=ab"


def test_url_command_shell_separator(capsys):
    code = run_cli("url", "https://www.example.com", "-p", "a=1", "-p", "b=2", "--platform", "windows", "--shell")

    assert code == 0
    assert capsys.readouterr().out.strip() == "https://www.example.com?a=1^&b=2"


def test_url_command_reports_malformed_url(capsys):
    code = run_cli("url", "ftp://www.example.com", "--platform", "linux")

    assert code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Error:" in captured.err
    assert "'ftp'" in captured.err


def test_url_command_reports_key_collision(capsys):
    code = run_cli("url", "https://www.example.com", "-p", "a=1", "-p", "a=2", "--platform", "macos")

    assert code == 1
    assert "more than once" in capsys.readouterr().err


def test_url_command_reports_bad_parameter(capsys):
    assert run_cli("url", "https://www.example.com", "-p", "novalue", "--platform", "linux") == 1
    assert "Error parsing query parameters" in capsys.readouterr().err


def test_open_command_launches_browser(on_linux, fake_popen):
    assert run_cli("open", "https://www.example.com", "-p", "q=1") == 0
    assert fake_popen.calls[0].args == ["xdg-open", "https://www.example.com?q=1"]


def test_open_command_shell_mode(on_linux, fake_popen):
    assert run_cli("open", "https://www.example.com", "--shell") == 0
    assert fake_popen.calls[0].input == "xdg-open https://www.example.com\n"


def test_open_command_failure_warns(on_linux, fake_popen, capsys):
    fake_popen.exit_code = 5

    assert run_cli("open", "https://www.example.com") == 1
    assert "Warning:" in capsys.readouterr().err


def test_open_command_strict_failure_is_an_error(on_linux, fake_popen, capsys):
    fake_popen.exit_code = 5

    assert run_cli("open", "https://www.example.com", "--strict") == 1
    err = capsys.readouterr().err
    assert "Error:" in err
    assert "Warning:" not in err


def test_open_command_rejects_malformed_url_without_launching(on_linux, fake_popen, capsys):
    assert run_cli("open", "") == 1
    assert fake_popen.calls == []
    assert "must not be empty" in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    assert run_cli() == 1
    assert "usage:" in capsys.readouterr().out


def test_update_check_runs_when_enabled(monkeypatch, capsys):
    calls = []
    monkeypatch.delenv(config.ENV_DISABLE_UPDATE_CHECK)
    monkeypatch.setattr(cli, "check_for_updates", lambda console: calls.append(console))

    assert run_cli("url", "https://www.example.com", "--platform", "linux") == 0
    assert calls == [cli.error_console]


def test_keyboard_interrupt_exits_130(monkeypatch):
    def interrupted(argv):
        raise KeyboardInterrupt

    monkeypatch.setattr(cli, "_main", interrupted)
    assert run_cli("open", "https://www.example.com") == 130
