"""Command-line token scanning for pr-auto-ready.

The grammar is small and positional-first, so tokens are scanned by hand:

* ``--help`` / ``-h`` stops scanning; later tokens are ignored.
* ``--interval N`` consumes the next token, whatever it looks like.
* The first two remaining tokens are the PR number and repository.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from pr_auto_ready.config import DEFAULT_INTERVAL_SECONDS
from pr_auto_ready.errors import ArgumentError
from pr_auto_ready.models import MonitorRequest

if TYPE_CHECKING:
    from collections.abc import Sequence

HELP_FLAGS = ("--help", "-h")
INTERVAL_FLAG = "--interval"

_INTEGER_RE = re.compile(r"[+-]?\d+")
_PR_NUMBER_RE = re.compile(r"\d+")

USAGE = """\
Usage: pr-auto-ready [PR_NUMBER] [REPO] [OPTIONS]

Arguments:
  PR_NUMBER    The pull request number to monitor (optional, auto-detected from branch)
  REPO         Repository in format 'owner/repo' (optional, auto-detected if in git repo)

Options:
  --interval N    Check interval in seconds (default: {default_interval})
  --help, -h      Show this help message

Examples:
  pr-auto-ready                          # Auto-detect PR and repo
  pr-auto-ready 4696                     # Explicit PR, auto-detect repo
  pr-auto-ready 4696 owner/repo          # Explicit PR and repo
  pr-auto-ready --interval 30            # Auto-detect PR, custom interval"""


def format_usage(default_interval: int = DEFAULT_INTERVAL_SECONDS) -> str:
    return USAGE.format(default_interval=default_interval)


def parse_interval(value: str) -> int:
    """Parse an interval token into a positive number of seconds."""
    if not _INTEGER_RE.fullmatch(value.strip()):
        raise ArgumentError("Interval must be a positive integer")
    interval = int(value)
    if interval <= 0:
        raise ArgumentError("Interval must be a positive integer")
    return interval


def is_valid_pr_number(value: str) -> bool:
    """True for a plain unsigned decimal literal such as ``"123"``."""
    return _PR_NUMBER_RE.fullmatch(value) is not None


def parse_args(argv: Sequence[str], *, default_interval: int = DEFAULT_INTERVAL_SECONDS) -> MonitorRequest:
    """Turn raw tokens (without the program name) into a MonitorRequest.

    Raises:
        ArgumentError: on a missing or invalid ``--interval`` value or a third positional.
    """
    pr_number: str | None = None
    repo: str | None = None
    interval = default_interval

    i = 0
    while i < len(argv):
        token = argv[i]
        if token in HELP_FLAGS:
            return MonitorRequest(pr_number=pr_number, repo=repo, interval_seconds=interval, help=True)
        if token == INTERVAL_FLAG:
            if i + 1 >= len(argv) or not argv[i + 1]:
                raise ArgumentError("--interval requires a value", show_usage=True)
            interval = parse_interval(argv[i + 1])
            i += 2
            continue
        if pr_number is None:
            pr_number = token
        elif repo is None:
            repo = token
        else:
            raise ArgumentError("Too many arguments", show_usage=True)
        i += 1

    return MonitorRequest(pr_number=pr_number, repo=repo, interval_seconds=interval)
