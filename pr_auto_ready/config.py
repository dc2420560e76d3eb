"""Central configuration for pr-auto-ready."""

import logging
import os
from dataclasses import dataclass, field

# Defaults
DEFAULT_INTERVAL_SECONDS = 60
DEFAULT_GH = "gh"
DEFAULT_RUNNER = "auto"
DEFAULT_LOG_LEVEL = "INFO"

RUNNER_CHOICES = ("auto", "process", "thread")


def _optional_float(name: str) -> float | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    return float(raw)


@dataclass(frozen=True)
class Settings:
    """Environment-driven settings for a single monitoring run."""

    default_interval: int = field(
        default_factory=lambda: int(os.environ.get("PR_AUTO_READY_INTERVAL", str(DEFAULT_INTERVAL_SECONDS)))
    )
    gh: str = field(default_factory=lambda: os.environ.get("PR_AUTO_READY_GH", DEFAULT_GH))
    runner: str = field(default_factory=lambda: os.environ.get("PR_AUTO_READY_RUNNER", DEFAULT_RUNNER))
    command_timeout: float | None = field(
        default_factory=lambda: _optional_float("PR_AUTO_READY_COMMAND_TIMEOUT")
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("PR_AUTO_READY_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    )

    def __post_init__(self) -> None:
        if self.default_interval <= 0:
            raise ValueError(f"PR_AUTO_READY_INTERVAL must be a positive integer, got {self.default_interval}")
        if self.runner not in RUNNER_CHOICES:
            raise ValueError(
                f"PR_AUTO_READY_RUNNER must be one of {', '.join(RUNNER_CHOICES)}, got {self.runner!r}"
            )
        if self.command_timeout is not None and self.command_timeout <= 0:
            raise ValueError("PR_AUTO_READY_COMMAND_TIMEOUT must be positive when set")
        if self.log_level not in logging.getLevelNamesMapping():
            raise ValueError(f"PR_AUTO_READY_LOG_LEVEL is not a logging level name, got {self.log_level!r}")
