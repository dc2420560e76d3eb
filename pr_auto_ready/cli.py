"""CLI entrypoint: parse, resolve, validate, then watch checks until ready."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import anyio

from pr_auto_ready.args import format_usage, parse_args
from pr_auto_ready.config import Settings
from pr_auto_ready.errors import ArgumentError, PrAutoReadyError, ResolutionError
from pr_auto_ready.github import GitHubCli
from pr_auto_ready.models import PollOutcome
from pr_auto_ready.poller import watch
from pr_auto_ready.resolver import resolve_ref
from pr_auto_ready.runner import select_runner
from pr_auto_ready.validator import validate_pr

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pr_auto_ready.models import MonitorRequest

log = logging.getLogger(__name__)


def _print_usage(settings: Settings) -> None:
    print(format_usage(settings.default_interval))


def _error(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)


async def run_monitor(request: MonitorRequest, client: GitHubCli) -> int:
    """Drive one monitoring run and return the process exit code."""
    ref = await resolve_ref(request, client)

    print(f"Validating PR #{ref.number} in repository {ref.repo}...")
    snapshot = await validate_pr(ref, client)
    print(f"✅ Found PR #{ref.number}: {snapshot.title}")

    print(f"Starting monitoring of PR #{ref.number} in {ref.repo}...")
    print(f"Checking every {request.interval_seconds} seconds for GitHub Actions status...")

    outcome = await watch(ref, client, interval=request.interval_seconds)
    return 0 if outcome is PollOutcome.READY else 1


async def _run(request: MonitorRequest, settings: Settings) -> int:
    runner = select_runner(settings)
    client = GitHubCli(runner, gh=settings.gh)
    return await run_monitor(request, client)


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entrypoint for pr-auto-ready."""
    tokens = list(sys.argv[1:] if argv is None else argv)

    try:
        settings = Settings()
    except ValueError as exc:
        _error(f"invalid configuration: {exc}")
        sys.exit(1)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        request = parse_args(tokens, default_interval=settings.default_interval)
        if request.help:
            _print_usage(settings)
            sys.exit(1)
        exit_code = anyio.run(_run, request, settings)
    except ArgumentError as exc:
        _error(str(exc))
        if exc.show_usage:
            _print_usage(settings)
        sys.exit(exc.exit_code)
    except ResolutionError as exc:
        _error(str(exc))
        _print_usage(settings)
        sys.exit(exc.exit_code)
    except PrAutoReadyError as exc:
        _error(str(exc))
        sys.exit(exc.exit_code)
    except KeyboardInterrupt:
        print("\nMonitoring interrupted.")
        sys.exit(1)
    except Exception as exc:
        log.debug("Unhandled exception", exc_info=True)
        print(f"Unexpected error: {exc}", file=sys.stderr)
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
