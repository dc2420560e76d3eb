"""Enums for pull-request and check state."""

from enum import StrEnum


class PullRequestState(StrEnum):
    """States the hosting platform reports for a pull request."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"
    MERGED = "MERGED"


class CheckState(StrEnum):
    """Every check state the platform CLI documents for `pr checks --json state`."""

    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    CANCELLED = "CANCELLED"
    TIMED_OUT = "TIMED_OUT"
    PENDING = "PENDING"
    QUEUED = "QUEUED"
    IN_PROGRESS = "IN_PROGRESS"
    SKIPPED = "SKIPPED"
    NEUTRAL = "NEUTRAL"
    STALE = "STALE"
    ACTION_REQUIRED = "ACTION_REQUIRED"
    STARTUP_FAILURE = "STARTUP_FAILURE"
    ERROR = "ERROR"
    EXPECTED = "EXPECTED"
    COMPLETED = "COMPLETED"
    REQUESTED = "REQUESTED"
    WAITING = "WAITING"


class CheckBucket(StrEnum):
    """Classification of a single check state."""

    FAILED = "failed"
    PENDING = "pending"
    PASSED = "passed"
    UNRECOGNIZED = "unrecognized"


class CheckDecision(StrEnum):
    """What one poll iteration concluded from the classified checks."""

    CHECKS_FAILED = "checks_failed"
    CHECKS_PENDING = "checks_pending"
    ALL_PASSED = "all_passed"


class PollOutcome(StrEnum):
    """Result of one poll iteration, acted on by the outer driver."""

    CONTINUE = "continue"
    READY = "ready"
    FAILED = "failed"
