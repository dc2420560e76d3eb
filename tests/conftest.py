"""Shared test fixtures."""

from __future__ import annotations

import json
from collections.abc import Sequence

import pytest

from pr_auto_ready.errors import CommandError
from pr_auto_ready.models import PullRequestRef

REPO_CMD = ("gh", "repo", "view", "--json", "nameWithOwner", "-q", ".nameWithOwner")
PR_NUMBER_CMD = ("gh", "pr", "view", "--json", "number", "-q", ".number")


def view_cmd(number: str, repo: str) -> tuple[str, ...]:
    return ("gh", "pr", "view", number, "--repo", repo, "--json", "title,state")


def checks_cmd(number: str, repo: str) -> tuple[str, ...]:
    return ("gh", "pr", "checks", number, "--repo", repo, "--json", "name,state")


def ready_cmd(number: str, repo: str) -> tuple[str, ...]:
    return ("gh", "pr", "ready", number, "--repo", repo)


def checks_json(*pairs: tuple[str, str]) -> str:
    return json.dumps([{"name": name, "state": state} for name, state in pairs])


def failure(args: Sequence[str], stderr: str = "boom") -> CommandError:
    return CommandError(args, 1, stderr)


Response = str | Exception | list[str | Exception]


class FakeRunner:
    """CommandRunner double keyed by the exact argument tuple.

    A list value is consumed one entry per call; its last entry repeats.
    Unknown commands fail the test.
    """

    def __init__(self, responses: dict[tuple[str, ...], Response] | None = None) -> None:
        self.responses: dict[tuple[str, ...], Response] = dict(responses or {})
        self.calls: list[tuple[str, ...]] = []

    async def run(self, args: Sequence[str]) -> str:
        key = tuple(args)
        self.calls.append(key)
        if key not in self.responses:
            raise AssertionError(f"unexpected command: {' '.join(key)}")
        response = self.responses[key]
        if isinstance(response, list):
            response = response.pop(0) if len(response) > 1 else response[0]
        if isinstance(response, Exception):
            raise response
        return response

    def count(self, args: tuple[str, ...]) -> int:
        return self.calls.count(args)


@pytest.fixture
def ref() -> PullRequestRef:
    return PullRequestRef(number="42", repo="octo/widgets")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "PR_AUTO_READY_INTERVAL",
        "PR_AUTO_READY_GH",
        "PR_AUTO_READY_RUNNER",
        "PR_AUTO_READY_COMMAND_TIMEOUT",
        "PR_AUTO_READY_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
