"""End-to-end tests for the CLI driver with a fake gh."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from conftest import (
    PR_NUMBER_CMD,
    REPO_CMD,
    FakeRunner,
    checks_cmd,
    checks_json,
    failure,
    ready_cmd,
    view_cmd,
)

from pr_auto_ready import cli
from pr_auto_ready.cli import main, run_monitor
from pr_auto_ready.github import GitHubCli
from pr_auto_ready.models import MonitorRequest

OPEN_PR = '{"title": "Add widgets", "state": "OPEN"}'


def _install(monkeypatch: pytest.MonkeyPatch, runner: FakeRunner) -> AsyncMock:
    monkeypatch.setattr("pr_auto_ready.cli.select_runner", lambda settings: runner)
    sleep = AsyncMock()
    monkeypatch.setattr("pr_auto_ready.poller.anyio.sleep", sleep)
    return sleep


def _exit_code(argv: list[str]) -> int | str | None:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


def test_all_checks_pass_marks_ready_and_exits_zero(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    runner = FakeRunner({
        view_cmd("42", "octo/widgets"): OPEN_PR,
        checks_cmd("42", "octo/widgets"): checks_json(("build", "SUCCESS")),
        ready_cmd("42", "octo/widgets"): "",
    })
    _install(monkeypatch, runner)

    assert _exit_code(["42", "octo/widgets"]) == 0
    assert runner.count(ready_cmd("42", "octo/widgets")) == 1
    out = capsys.readouterr().out
    assert "Found PR #42: Add widgets" in out
    assert "PR #42 has been marked as ready for review!" in out


def test_failed_and_queued_checks_sleep_then_repoll(monkeypatch: pytest.MonkeyPatch) -> None:
    runner = FakeRunner({
        view_cmd("42", "octo/widgets"): OPEN_PR,
        checks_cmd("42", "octo/widgets"): [
            checks_json(("lint", "FAILURE"), ("build", "QUEUED")),
            checks_json(("lint", "SUCCESS"), ("build", "SUCCESS")),
        ],
        ready_cmd("42", "octo/widgets"): "",
    })
    sleep = _install(monkeypatch, runner)

    assert _exit_code(["42", "octo/widgets", "--interval", "30"]) == 0
    sleep.assert_awaited_once_with(30)
    ready_index = runner.calls.index(ready_cmd("42", "octo/widgets"))
    assert runner.calls[:ready_index].count(checks_cmd("42", "octo/widgets")) == 2


def test_merged_pr_fails_before_polling(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    runner = FakeRunner({view_cmd("42", "octo/widgets"): '{"title": "t", "state": "MERGED"}'})
    _install(monkeypatch, runner)

    assert _exit_code(["42", "octo/widgets"]) == 1
    assert "is not open (current state: MERGED)" in capsys.readouterr().err
    assert checks_cmd("42", "octo/widgets") not in runner.calls


def test_missing_pr_reported(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    cmd = view_cmd("9", "octo/widgets")
    _install(monkeypatch, FakeRunner({cmd: failure(cmd)}))

    assert _exit_code(["9", "octo/widgets"]) == 1
    assert "Error: Could not find PR #9 in repository octo/widgets" in capsys.readouterr().err


def test_auto_detects_both_before_validation(monkeypatch: pytest.MonkeyPatch) -> None:
    runner = FakeRunner({
        PR_NUMBER_CMD: "17",
        REPO_CMD: "octo/widgets",
        view_cmd("17", "octo/widgets"): OPEN_PR,
        checks_cmd("17", "octo/widgets"): checks_json(),
        ready_cmd("17", "octo/widgets"): "",
    })
    _install(monkeypatch, runner)

    assert _exit_code([]) == 0
    assert runner.calls[:3] == [PR_NUMBER_CMD, REPO_CMD, view_cmd("17", "octo/widgets")]


def test_resolution_failure_prints_usage(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    _install(monkeypatch, FakeRunner({PR_NUMBER_CMD: failure(PR_NUMBER_CMD)}))

    assert _exit_code([]) == 1
    captured = capsys.readouterr()
    assert "Could not auto-detect PR number" in captured.err
    assert "Usage: pr-auto-ready" in captured.out


@pytest.mark.parametrize("value", ["0", "-5", "abc"])
def test_bad_interval_exits_one_without_gh(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], value: str,
) -> None:
    runner = FakeRunner()
    _install(monkeypatch, runner)

    assert _exit_code(["--interval", value]) == 1
    assert "Interval must be a positive integer" in capsys.readouterr().err
    assert runner.calls == []


def test_too_many_arguments(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _install(monkeypatch, FakeRunner())

    assert _exit_code(["1", "o/r", "extra"]) == 1
    captured = capsys.readouterr()
    assert "Error: Too many arguments" in captured.err
    assert "Usage: pr-auto-ready" in captured.out


def test_help_prints_usage_and_exits_one(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    runner = FakeRunner()
    _install(monkeypatch, runner)

    assert _exit_code(["-h", "too", "many", "args"]) == 1
    assert "Usage: pr-auto-ready" in capsys.readouterr().out
    assert runner.calls == []


def test_bad_pr_number_format(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _install(monkeypatch, FakeRunner())

    assert _exit_code(["1.5", "o/r"]) == 1
    assert "PR number must be a positive integer" in capsys.readouterr().err


def test_invalid_configuration(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("PR_AUTO_READY_RUNNER", "fork")

    assert _exit_code(["1", "o/r"]) == 1
    assert "Error: invalid configuration" in capsys.readouterr().err


def test_invalid_log_level_is_a_configuration_error(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv("PR_AUTO_READY_LOG_LEVEL", "BASIC_FORMAT")
    runner = FakeRunner()
    _install(monkeypatch, runner)

    assert _exit_code(["1", "o/r"]) == 1
    assert "Error: invalid configuration: PR_AUTO_READY_LOG_LEVEL" in capsys.readouterr().err
    assert runner.calls == []


def test_driver_logger_follows_module_name() -> None:
    assert cli.log.name == "pr_auto_ready.cli"


def test_unexpected_error_safety_net(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    def explode(settings: object) -> None:
        raise RuntimeError("kaboom")

    monkeypatch.setattr("pr_auto_ready.cli.select_runner", explode)

    assert _exit_code(["1", "o/r"]) == 1
    assert "Unexpected error: kaboom" in capsys.readouterr().err


def test_configured_gh_executable_is_used(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PR_AUTO_READY_GH", "gh-enterprise")
    view = ("gh-enterprise", *view_cmd("1", "o/r")[1:])
    runner = FakeRunner({view: '{"title": "t", "state": "CLOSED"}'})
    _install(monkeypatch, runner)

    assert _exit_code(["1", "o/r"]) == 1
    assert runner.calls == [view]


@pytest.mark.anyio
async def test_run_monitor_returns_exit_code_for_mark_failure() -> None:
    ready = ready_cmd("42", "octo/widgets")
    runner = FakeRunner({
        view_cmd("42", "octo/widgets"): OPEN_PR,
        checks_cmd("42", "octo/widgets"): checks_json(("build", "SUCCESS")),
        ready: failure(ready, "already ready"),
    })
    request = MonitorRequest(pr_number="42", repo="octo/widgets", interval_seconds=10)

    assert await run_monitor(request, GitHubCli(runner)) == 1
