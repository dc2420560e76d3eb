"""Fill in the PR number and repository the operator left out."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from pr_auto_ready.args import is_valid_pr_number
from pr_auto_ready.errors import ArgumentError, CommandError, ResolutionError
from pr_auto_ready.models import MonitorRequest, PullRequestRef

if TYPE_CHECKING:
    from pr_auto_ready.github import GitHubCli

log = logging.getLogger(__name__)

REPO_HINT = "Could not auto-detect repository. Please specify repository or run from a git directory."
PR_HINT = (
    "Could not auto-detect PR number. Please specify PR number explicitly"
    " or ensure you are on a branch with an associated PR."
)


async def detect_repo(client: GitHubCli) -> str:
    try:
        repo = await client.current_repo()
    except CommandError as exc:
        log.debug("Repository auto-detection failed: %s", exc)
        raise ResolutionError(REPO_HINT) from exc
    if not repo:
        raise ResolutionError(REPO_HINT)
    return repo


async def detect_pr_number(client: GitHubCli) -> str:
    try:
        number = await client.current_pr_number()
    except CommandError as exc:
        log.debug("PR auto-detection failed: %s", exc)
        raise ResolutionError(PR_HINT) from exc
    if not number:
        log.debug("No PR associated with current branch")
        raise ResolutionError(PR_HINT)
    return number


async def resolve_ref(request: MonitorRequest, client: GitHubCli) -> PullRequestRef:
    """Resolve the PR number, then the repository, into a PullRequestRef.

    Explicit values are used as given; the collaborator is only asked for
    what is missing. The PR number is format-checked whatever its source.
    """
    if request.pr_number is None:
        print("No PR number specified, attempting to auto-detect...")
        number = await detect_pr_number(client)
        print(f"Auto-detected PR number: {number}")
    else:
        number = request.pr_number

    if not is_valid_pr_number(number):
        raise ArgumentError("PR number must be a positive integer")

    if request.repo is None:
        print("No repository specified, attempting to auto-detect...")
        repo = await detect_repo(client)
        print(f"Auto-detected repository: {repo}")
    else:
        repo = request.repo

    try:
        return PullRequestRef(number=number, repo=repo)
    except ValidationError as exc:
        raise ArgumentError(f"Repository must be in 'owner/repo' format, got {repo!r}") from exc
