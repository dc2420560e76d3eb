"""Data models for pull requests, checks and monitor requests."""

from pr_auto_ready.models.enums import (
    CheckBucket,
    CheckDecision,
    CheckState,
    PollOutcome,
    PullRequestState,
)
from pr_auto_ready.models.pull_request import (
    CheckResult,
    CheckSummary,
    MonitorRequest,
    PullRequestRef,
    PullRequestSnapshot,
)

__all__ = [
    "CheckBucket",
    "CheckDecision",
    "CheckResult",
    "CheckState",
    "CheckSummary",
    "MonitorRequest",
    "PollOutcome",
    "PullRequestRef",
    "PullRequestSnapshot",
    "PullRequestState",
]
