"""Strategies for running external collaborator commands.

Both runners share one contract: ``await runner.run(args)`` returns the
command's stripped standard output, or raises CommandError for a non-zero
exit, a timeout, or an executable that cannot be started.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import subprocess
import sys
from typing import TYPE_CHECKING, Protocol

import anyio
import anyio.to_thread

from pr_auto_ready.errors import CommandError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pr_auto_ready.config import Settings

log = logging.getLogger(__name__)

TIMEOUT_STDERR = "timeout"


class CommandRunner(Protocol):
    async def run(self, args: Sequence[str]) -> str: ...


class ProcessRunner:
    """Spawn commands directly on the event loop via anyio."""

    def __init__(self, *, timeout: float | None = None) -> None:
        self.timeout = timeout

    async def run(self, args: Sequence[str]) -> str:
        log.debug("Running: %s", " ".join(args))
        try:
            with anyio.fail_after(self.timeout):
                result = await anyio.run_process(list(args), check=False)
        except TimeoutError:
            log.error("Command timed out after %ss: %s", self.timeout, " ".join(args))
            raise CommandError(args, 1, TIMEOUT_STDERR) from None
        except OSError as exc:
            raise CommandError(args, 127, str(exc)) from exc

        stdout = result.stdout.decode("utf-8", errors="replace")
        stderr = result.stderr.decode("utf-8", errors="replace")
        if result.returncode != 0:
            log.debug("Command failed: %s\nstderr: %s", " ".join(args), stderr.strip())
            raise CommandError(args, result.returncode, stderr)
        return stdout.strip()


class ThreadRunner:
    """Run blocking ``subprocess.run`` calls in a worker thread."""

    def __init__(self, *, timeout: float | None = None) -> None:
        self.timeout = timeout

    async def run(self, args: Sequence[str]) -> str:
        log.debug("Running: %s", " ".join(args))
        call = functools.partial(
            subprocess.run,
            list(args),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=self.timeout,
        )
        try:
            result = await anyio.to_thread.run_sync(call)
        except subprocess.TimeoutExpired:
            log.error("Command timed out after %ss: %s", self.timeout, " ".join(args))
            raise CommandError(args, 1, TIMEOUT_STDERR) from None
        except OSError as exc:
            raise CommandError(args, 127, str(exc)) from exc

        if result.returncode != 0:
            log.debug("Command failed: %s\nstderr: %s", " ".join(args), result.stderr.strip())
            raise CommandError(args, result.returncode, result.stderr)
        return result.stdout.strip()


def native_subprocess_supported() -> bool:
    """Whether the running event loop can spawn subprocesses itself.

    Selector-based asyncio loops on Windows cannot; anything else can.
    """
    if sys.platform != "win32":
        return True
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        return False
    return not isinstance(loop, asyncio.SelectorEventLoop)


def select_runner(settings: Settings) -> CommandRunner:
    """Pick the runner once at startup, honouring an explicit choice."""
    choice = settings.runner
    if choice == "auto":
        choice = "process" if native_subprocess_supported() else "thread"
    log.debug("Using %s command runner", choice)
    if choice == "process":
        return ProcessRunner(timeout=settings.command_timeout)
    return ThreadRunner(timeout=settings.command_timeout)
