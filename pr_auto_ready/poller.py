"""Check polling loop and the ready-for-review transition.

Each iteration fetches the full check list, classifies it, and returns a
PollOutcome. Nothing carries over between iterations. Only the outer
``watch`` loop sleeps, and only the CLI driver turns outcomes into exit codes.
"""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import anyio

from pr_auto_ready.errors import ChecksFetchError, CommandError, MarkReadyError
from pr_auto_ready.models import (
    CheckBucket,
    CheckDecision,
    CheckState,
    CheckSummary,
    PollOutcome,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pr_auto_ready.github import GitHubCli
    from pr_auto_ready.models import CheckResult, PullRequestRef

log = logging.getLogger(__name__)

FAILED_STATES = frozenset({CheckState.FAILURE, CheckState.CANCELLED, CheckState.TIMED_OUT})
PENDING_STATES = frozenset({CheckState.IN_PROGRESS, CheckState.QUEUED, CheckState.PENDING})
_KNOWN_STATES = frozenset(CheckState)


def classify_state(state: str) -> CheckBucket:
    """Map a raw check state onto its bucket."""
    if state in FAILED_STATES:
        return CheckBucket.FAILED
    if state in PENDING_STATES:
        return CheckBucket.PENDING
    if state in _KNOWN_STATES:
        return CheckBucket.PASSED
    return CheckBucket.UNRECOGNIZED


def summarize_checks(checks: Iterable[CheckResult]) -> CheckSummary:
    summary = CheckSummary()
    for check in checks:
        bucket = classify_state(check.state)
        if bucket is CheckBucket.FAILED:
            summary.failed.append(check.name)
        elif bucket is CheckBucket.PENDING:
            summary.pending.append(check.name)
        elif bucket is CheckBucket.PASSED:
            summary.passed.append(check.name)
        else:
            log.warning("Check %r reported unrecognized state %r; counting it as passed", check.name, check.state)
            summary.unrecognized.append(check.name)
    return summary


def decide(summary: CheckSummary) -> CheckDecision:
    """Failed beats pending; anything else, including no checks at all, is a pass."""
    if summary.failed:
        return CheckDecision.CHECKS_FAILED
    if summary.pending:
        return CheckDecision.CHECKS_PENDING
    return CheckDecision.ALL_PASSED


async def fetch_checks(ref: PullRequestRef, client: GitHubCli) -> list[CheckResult]:
    """Fetch the current checks. Never retried."""
    try:
        return await client.pr_checks(ref.number, ref.repo)
    except CommandError as exc:
        raise ChecksFetchError(exc) from exc


async def mark_ready(ref: PullRequestRef, client: GitHubCli) -> None:
    """Move the PR out of draft. Never retried."""
    try:
        await client.mark_ready(ref.number, ref.repo)
    except CommandError as exc:
        raise MarkReadyError(exc) from exc


def _timestamp() -> str:
    return datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")


def _report(header: str, names: list[str]) -> None:
    print(header)
    for name in names:
        print(name)


async def poll_once(ref: PullRequestRef, client: GitHubCli) -> PollOutcome:
    """Run a single fetch, classify and decide step."""
    print()
    print(f"{_timestamp()}: Checking PR status...")

    try:
        checks = await fetch_checks(ref, client)
    except ChecksFetchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return PollOutcome.FAILED

    summary = summarize_checks(checks)
    decision = decide(summary)
    log.debug(
        "PR #%s: %d failed, %d pending, %d passed, %d unrecognized -> %s",
        ref.number, len(summary.failed), len(summary.pending),
        len(summary.passed), len(summary.unrecognized), decision,
    )

    if decision is CheckDecision.CHECKS_FAILED:
        _report("❌ Failed checks detected:", summary.failed)
        print("Waiting for checks to be fixed...")
        return PollOutcome.CONTINUE

    if decision is CheckDecision.CHECKS_PENDING:
        _report("⏳ Checks still running:", summary.pending)
        return PollOutcome.CONTINUE

    print("✅ All GitHub Actions have passed!")
    print(f"Marking PR #{ref.number} as ready for review...")
    try:
        await mark_ready(ref, client)
    except MarkReadyError as exc:
        print(f"❌ {exc}", file=sys.stderr)
        return PollOutcome.FAILED

    print(f"🎉 PR #{ref.number} has been marked as ready for review!")
    return PollOutcome.READY


async def watch(ref: PullRequestRef, client: GitHubCli, *, interval: int) -> PollOutcome:
    """Poll until an iteration returns READY or FAILED. No iteration cap."""
    while True:
        outcome = await poll_once(ref, client)
        if outcome is not PollOutcome.CONTINUE:
            return outcome
        print(f"Waiting {interval} seconds before next check...")
        await anyio.sleep(interval)
