"""Confirm the target pull request exists and is open."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pr_auto_ready.errors import CommandError, PullRequestNotFoundError, PullRequestNotOpenError
from pr_auto_ready.models import PullRequestState

if TYPE_CHECKING:
    from pr_auto_ready.github import GitHubCli
    from pr_auto_ready.models import PullRequestRef, PullRequestSnapshot

log = logging.getLogger(__name__)


async def validate_pr(ref: PullRequestRef, client: GitHubCli) -> PullRequestSnapshot:
    """Fetch the PR once and check its state.

    Raises:
        PullRequestNotFoundError: the query itself failed.
        PullRequestNotOpenError: the PR exists but is closed or merged.
    """
    try:
        snapshot = await client.view_pr(ref.number, ref.repo)
    except CommandError as exc:
        log.debug("PR lookup failed: %s", exc)
        raise PullRequestNotFoundError(ref.number, ref.repo) from exc

    if snapshot.state != PullRequestState.OPEN:
        raise PullRequestNotOpenError(ref.number, snapshot.state)
    return snapshot
