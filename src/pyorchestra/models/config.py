"""Scheduler interval configuration.

Intervals are seconds. Defaults match a notification feed that is
checked every 30 seconds, cleaned every 5 minutes and keeps one hour of
history.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from datetime import timedelta

GENERATE_INTERVAL_ENV = "PYORCHESTRA_GENERATE_INTERVAL"
CLEANUP_INTERVAL_ENV = "PYORCHESTRA_CLEANUP_INTERVAL"
RETENTION_ENV = "PYORCHESTRA_RETENTION"


@dataclass(frozen=True)
class SchedulerIntervals:
    """
    Timing configuration for PeriodicScheduler.

    Attributes:
        generate_interval: Seconds between generation ticks (Tg)
        cleanup_interval: Seconds between cleanup ticks (Tc)
        retention: Maximum record age in seconds before cleanup removes it (W)

    Example:
        intervals = SchedulerIntervals(generate_interval=0.5, cleanup_interval=5.0)
        intervals = SchedulerIntervals.from_env()
    """

    generate_interval: float = 30.0
    cleanup_interval: float = 300.0
    retention: float = 3600.0

    def __post_init__(self) -> None:
        if self.generate_interval <= 0:
            raise ValueError(f"generate_interval must be > 0, got {self.generate_interval}")
        if self.cleanup_interval <= 0:
            raise ValueError(f"cleanup_interval must be > 0, got {self.cleanup_interval}")
        if self.retention < 0:
            raise ValueError(f"retention must be >= 0, got {self.retention}")

    @property
    def retention_window(self) -> timedelta:
        return timedelta(seconds=self.retention)

    def with_generate_interval(self, seconds: float) -> SchedulerIntervals:
        return replace(self, generate_interval=seconds)

    def with_cleanup_interval(self, seconds: float) -> SchedulerIntervals:
        return replace(self, cleanup_interval=seconds)

    def with_retention(self, seconds: float) -> SchedulerIntervals:
        return replace(self, retention=seconds)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> SchedulerIntervals:
        """
        Read intervals from environment variables, falling back to defaults.

        Reads PYORCHESTRA_GENERATE_INTERVAL, PYORCHESTRA_CLEANUP_INTERVAL and
        PYORCHESTRA_RETENTION.

        Raises:
            ValueError: If a variable is set but is not a number

        Example:
            # $ export PYORCHESTRA_GENERATE_INTERVAL=5
            intervals = SchedulerIntervals.from_env()
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            generate_interval=_read_seconds(env, GENERATE_INTERVAL_ENV, defaults.generate_interval),
            cleanup_interval=_read_seconds(env, CLEANUP_INTERVAL_ENV, defaults.cleanup_interval),
            retention=_read_seconds(env, RETENTION_ENV, defaults.retention),
        )


def _read_seconds(env, key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{key} must be a number of seconds, got {raw!r}") from e
