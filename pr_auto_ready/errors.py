"""Exceptions raised while resolving, validating and watching a pull request."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class PrAutoReadyError(Exception):
    """Base class for every error that ends a run with a message."""

    exit_code = 1


class ArgumentError(PrAutoReadyError):
    """Malformed, missing or excess command-line input."""

    def __init__(self, message: str, *, show_usage: bool = False) -> None:
        super().__init__(message)
        self.show_usage = show_usage


class ResolutionError(PrAutoReadyError):
    """Auto-detection of the repository or PR number failed."""


class PullRequestValidationError(PrAutoReadyError):
    """The target pull request cannot be monitored."""


class PullRequestNotFoundError(PullRequestValidationError):
    def __init__(self, number: str, repo: str) -> None:
        super().__init__(f"Could not find PR #{number} in repository {repo}")
        self.number = number
        self.repo = repo


class PullRequestNotOpenError(PullRequestValidationError):
    def __init__(self, number: str, state: str) -> None:
        super().__init__(f"PR #{number} is not open (current state: {state})")
        self.number = number
        self.state = state


class CommandError(PrAutoReadyError):
    """An external collaborator command failed, timed out or could not be started."""

    def __init__(self, args: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.args_list = list(args)
        self.returncode = returncode
        self.stderr = stderr.strip()
        message = f"Command failed: {' '.join(self.args_list)}"
        if self.stderr:
            message += f"\nError: {self.stderr}"
        super().__init__(message)


class ChecksFetchError(PrAutoReadyError):
    """Fetching the check list failed; never retried."""

    def __init__(self, cause: Exception) -> None:
        super().__init__(f"Failed to get PR checks: {cause}")


class MarkReadyError(PrAutoReadyError):
    """The ready-for-review transition failed; never retried."""

    def __init__(self, cause: Exception) -> None:
        super().__init__(f"Failed to mark PR as ready for review: {cause}")
