"""
Pytest configuration and fixtures for pyorchestra tests.

Provides reusable fixtures for stores, clocks, schedulers and operations.
"""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime

import pytest

from pyorchestra.executor import PeriodicScheduler
from pyorchestra.models import SchedulerIntervals
from pyorchestra.storage import InMemoryRecordStore
from pyorchestra.testing import FakeClock


class CountingGenerator:
    """Deterministic generator producing ``per_tick`` messages per call."""

    def __init__(self, per_tick: int = 1):
        self.per_tick = per_tick
        self.calls = 0

    def __call__(self, existing: int) -> list[str]:
        self.calls += 1
        return [f"Notification {existing + i + 1}" for i in range(self.per_tick)]


@pytest.fixture
def store() -> InMemoryRecordStore:
    """Empty in-memory record store."""
    return InMemoryRecordStore()


@pytest.fixture
def fake_clock() -> FakeClock:
    """Clock frozen at 2024-01-01 UTC until advanced."""
    return FakeClock(datetime(2024, 1, 1, tzinfo=UTC))


@pytest.fixture
def counting_generator() -> CountingGenerator:
    return CountingGenerator(per_tick=1)


@pytest.fixture
def fast_intervals() -> SchedulerIntervals:
    """Intervals short enough for real-time tests."""
    return SchedulerIntervals(generate_interval=0.02, cleanup_interval=0.05, retention=3600.0)


@pytest.fixture
async def scheduler(
    store, counting_generator, fast_intervals
) -> AsyncGenerator[PeriodicScheduler, None]:
    """Scheduler with deterministic generator, stopped automatically."""
    sched = PeriodicScheduler(store=store, generator=counting_generator, intervals=fast_intervals)
    yield sched
    await sched.stop()

