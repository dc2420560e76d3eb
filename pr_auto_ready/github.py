"""Typed wrapper around the ``gh`` CLI calls this tool needs."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from pr_auto_ready.config import DEFAULT_GH
from pr_auto_ready.errors import CommandError
from pr_auto_ready.models import CheckResult, PullRequestSnapshot

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pr_auto_ready.runner import CommandRunner

log = logging.getLogger(__name__)

_CHECKS_ADAPTER = TypeAdapter(list[CheckResult])


class GitHubCli:
    """Query and mutate pull requests through an authenticated ``gh``."""

    def __init__(self, runner: CommandRunner, *, gh: str = DEFAULT_GH) -> None:
        self.runner = runner
        self.gh = gh

    async def _run(self, *args: str) -> str:
        return await self.runner.run([self.gh, *args])

    def _malformed(self, args: Sequence[str], exc: ValidationError) -> CommandError:
        log.debug("Unparseable gh output: %s", exc)
        return CommandError([self.gh, *args], 0, f"unexpected output from gh: {exc.error_count()} error(s)")

    async def current_repo(self) -> str:
        """Return ``owner/name`` for the repository in the working directory."""
        return await self._run("repo", "view", "--json", "nameWithOwner", "-q", ".nameWithOwner")

    async def current_pr_number(self) -> str:
        """Return the PR number for the current branch, or an empty string."""
        return await self._run("pr", "view", "--json", "number", "-q", ".number")

    async def view_pr(self, number: str, repo: str) -> PullRequestSnapshot:
        args = ("pr", "view", number, "--repo", repo, "--json", "title,state")
        output = await self._run(*args)
        try:
            return PullRequestSnapshot.model_validate_json(output)
        except ValidationError as exc:
            raise self._malformed(args, exc) from exc

    async def pr_checks(self, number: str, repo: str) -> list[CheckResult]:
        args = ("pr", "checks", number, "--repo", repo, "--json", "name,state")
        output = await self._run(*args)
        try:
            return _CHECKS_ADAPTER.validate_json(output or "[]")
        except ValidationError as exc:
            raise self._malformed(args, exc) from exc

    async def mark_ready(self, number: str, repo: str) -> None:
        await self._run("pr", "ready", number, "--repo", repo)
