"""Pull request, check and request models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pr_auto_ready.config import DEFAULT_INTERVAL_SECONDS

PR_NUMBER_PATTERN = r"^\d+$"
REPO_PATTERN = r"^(?:[^/\s]+/)?[^/\s]+/[^/\s]+$"


class MonitorRequest(BaseModel):
    """Structured form of the command line, built once per run."""

    model_config = ConfigDict(frozen=True)

    pr_number: str | None = Field(default=None, description="PR number exactly as typed, if given")
    repo: str | None = Field(default=None, description="Repository as typed, if given")
    interval_seconds: int = Field(default=DEFAULT_INTERVAL_SECONDS, gt=0)
    help: bool = False


class PullRequestRef(BaseModel):
    """Resolved target of the run."""

    model_config = ConfigDict(frozen=True)

    number: str = Field(pattern=PR_NUMBER_PATTERN)
    repo: str = Field(pattern=REPO_PATTERN, description="owner/name, optionally host-prefixed")


class PullRequestSnapshot(BaseModel):
    """Title and state of a pull request, fetched once for validation."""

    title: str
    state: str


class CheckResult(BaseModel):
    """One named verification check and its raw reported state."""

    name: str
    state: str


class CheckSummary(BaseModel):
    """Check names partitioned by bucket, in fetch order."""

    failed: list[str] = Field(default_factory=list)
    pending: list[str] = Field(default_factory=list)
    passed: list[str] = Field(default_factory=list)
    unrecognized: list[str] = Field(default_factory=list)
