"""CLI behaviour coverage for the click entry point."""

from __future__ import annotations

import re
import sys
from typing import Callable

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner

from lib_log_relay import __init__conf__
from lib_log_relay import cli as cli_mod
from lib_log_relay.cli import summary_info
from lib_log_relay.runtime import is_initialised
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    """Return ``text`` without ANSI colour codes.

    Examples
    --------
    >>> strip_ansi("\x1b[31mred\x1b[0m")
    'red'
    """

    return ANSI_RE.sub("", text)


def run_cli(args: list[str] | None = None) -> tuple[int, str, BaseException | None]:
    """Invoke the click command with ``CliRunner`` and capture output."""

    runner = CliRunner()
    original_argv = sys.argv
    sys.argv = [__init__conf__.shell_command]
    try:
        result = runner.invoke(
            cli_mod.cli,
            args or [],
            prog_name=__init__conf__.shell_command,
        )
    finally:
        sys.argv = original_argv
    return result.exit_code, result.output, result.exception


def test_cli_without_subcommand_prints_summary() -> None:
    exit_code, stdout, _ = run_cli()

    assert exit_code == 0
    assert stdout == summary_info()
    assert stdout.startswith("Info for lib_log_relay:")


def test_cli_info_command_matches_summary() -> None:
    exit_code, stdout, _ = run_cli(["info"])

    assert exit_code == 0
    assert stdout == summary_info()


def test_cli_version_option() -> None:
    exit_code, stdout, _ = run_cli(["--version"])

    assert exit_code == 0
    assert stdout.strip() == f"{__init__conf__.shell_command} version {__init__conf__.version}"


def test_cli_no_traceback_option(monkeypatch: pytest.MonkeyPatch) -> None:
    """`--no-traceback` should disable verbose tracebacks for subsequent commands."""

    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", True, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", True, raising=False)

    exit_code, _stdout, _exception = run_cli(["--no-traceback", "info"])

    assert exit_code == 0
    assert lib_cli_exit_tools.config.traceback is False
    assert lib_cli_exit_tools.config.traceback_force_color is False


def test_cli_demo_forwards_events_at_or_above_threshold() -> None:
    exit_code, stdout, exception = run_cli(["demo", "--no-color"])

    assert exception is None
    assert exit_code == 0
    plain = strip_ansi(stdout)
    assert "forwarded 3 of 5 events (threshold warning), flushes=1" in plain
    assert "warning sample event" in plain
    assert "debug sample event" not in plain
    assert not is_initialised(cli_mod.DEMO_ADAPTER)


def test_cli_demo_applies_level_metadata_and_formatter() -> None:
    exit_code, stdout, _ = run_cli(
        ["demo", "--no-color", "--level", "debug", "--meta", "app=demo", "--formatter", "tests.helpers:bracket"],
    )

    assert exit_code == 0
    plain = strip_ansi(stdout)
    assert "forwarded 5 of 5 events (threshold debug)" in plain
    assert "[info] info sample event" in plain
    assert "app=demo" in plain


def test_cli_demo_counts_format_failures_as_drops() -> None:
    exit_code, stdout, _ = run_cli(["demo", "--no-color", "--formatter", "json:dumps"])

    assert exit_code == 0
    assert "forwarded 0 of 5 events" in strip_ansi(stdout)


def test_cli_demo_rejects_malformed_metadata() -> None:
    exit_code, stdout, _ = run_cli(["demo", "--meta", "novalue"])

    assert exit_code == 2
    assert "KEY=VALUE" in stdout


def test_demo_helper_returns_counts() -> None:
    result = cli_mod._demo(level="error", metadata={}, formatter=None)

    assert result == {"level": "error", "emitted": 5, "forwarded": 2, "flushes": 1}


def test_main_restores_traceback_preferences(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", True, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", True, raising=False)

    recorded: dict[str, bool] = {}

    def fake_run_cli(command: Callable[..., int], argv: list[str] | None = None, *, prog_name: str | None = None, **_: object) -> int:
        runner = CliRunner()
        result = runner.invoke(command, ["--no-traceback", "info"] if argv is None else argv)
        if result.exception is not None:
            raise result.exception
        recorded["traceback"] = lib_cli_exit_tools.config.traceback
        recorded["traceback_force_color"] = lib_cli_exit_tools.config.traceback_force_color
        return result.exit_code

    monkeypatch.setattr(lib_cli_exit_tools, "run_cli", fake_run_cli)

    exit_code = cli_mod.main(["--no-traceback", "info"])

    assert exit_code == 0
    assert recorded == {"traceback": False, "traceback_force_color": False}
    assert lib_cli_exit_tools.config.traceback is True
    assert lib_cli_exit_tools.config.traceback_force_color is True


def test_main_consumes_sys_argv(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", False, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", False, raising=False)
    monkeypatch.setattr(sys, "argv", [__init__conf__.shell_command, "info"], raising=False)

    exit_code = cli_mod.main()
    captured = capsys.readouterr()

    assert exit_code == 0
    assert "Info for lib_log_relay:" in captured.out
