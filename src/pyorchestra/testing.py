"""Helpers for testing code built on the orchestration layer.

Operation factories with controlled timing and failures, timing
measurement, and a manually advanced clock for the periodic scheduler.
"""

from __future__ import annotations

import asyncio
import time
from datetime import UTC, datetime, timedelta
from typing import Any, TypeVar

from pyorchestra.models import Operation, OperationFailure

T = TypeVar("T")

__all__ = [
    "FlakyOperation",
    "flaky_operation",
    "delayed",
    "failing_after",
    "never_settling",
    "measure",
    "completes_within",
    "FakeClock",
]


class FlakyOperation:
    """Operation that fails its first ``failures`` calls, then succeeds.

    Attributes:
        calls: Number of times the operation has been invoked
    """

    def __init__(self, failures: int, result: Any = "success", delay: float = 0.0):
        self.failures = failures
        self.result = result
        self.delay = delay
        self.calls = 0

    async def __call__(self) -> Any:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.calls <= self.failures:
            raise OperationFailure(f"Failure {self.calls}/{self.failures}")
        return self.result

    def reset(self) -> None:
        self.calls = 0


def flaky_operation(failures: int, result: Any = "success") -> FlakyOperation:
    """Build an operation failing ``failures`` times before returning ``result``."""
    return FlakyOperation(failures, result)


def delayed(value: T, delay: float) -> Operation[T]:
    """Operation returning ``value`` after ``delay`` seconds."""

    async def operation() -> T:
        await asyncio.sleep(delay)
        return value

    return operation


def failing_after(error: BaseException, delay: float) -> Operation[Any]:
    """Operation raising ``error`` after ``delay`` seconds."""

    async def operation() -> Any:
        await asyncio.sleep(delay)
        raise error

    return operation


def never_settling() -> Operation[Any]:
    """Operation that waits forever (until cancelled)."""

    async def operation() -> Any:
        await asyncio.Event().wait()

    return operation


async def measure(operation: Operation[T]) -> tuple[T, float]:
    """Run an operation and return (result, elapsed seconds)."""
    start = time.monotonic()
    result = await operation()
    return result, time.monotonic() - start


async def completes_within(operation: Operation[Any], max_seconds: float) -> bool:
    """Return True if the operation succeeds within ``max_seconds``.

    A failure counts as not completing.
    """
    start = time.monotonic()
    try:
        await operation()
    except Exception:
        return False
    return time.monotonic() - start <= max_seconds


class FakeClock:
    """Manually advanced clock usable as the scheduler's clock.

    Example:
        ```python
        clock = FakeClock()
        scheduler = PeriodicScheduler(clock=clock)
        clock.advance(seconds=3601)
        ```
    """

    def __init__(self, start: datetime | None = None):
        self._now = start if start is not None else datetime(2024, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self._now

    def advance(self, seconds: float = 0.0) -> datetime:
        self._now += timedelta(seconds=seconds)
        return self._now
