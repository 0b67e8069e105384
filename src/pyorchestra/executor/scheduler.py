"""Periodic scheduler producing and pruning notification records.

Two background tasks run on independent fixed intervals:
- "generate" appends new records built from a pluggable generator
- "cleanup" removes records older than the retention window

Both write through the same RecordStore, which serializes access. A
failing tick is logged and reported to the optional error sink; the loop
keeps going. Ticks fire every interval after the previous one finished;
missed ticks are never caught up.

Usage:
    scheduler = PeriodicScheduler() \\
        .with_generate_interval(30.0) \\
        .with_cleanup_interval(300.0) \\
        .with_retention(3600.0)

    await scheduler.start()
    records = await scheduler.list()
    await scheduler.stop()
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import random
from collections.abc import Awaitable, Callable, Iterable
from datetime import UTC, datetime

from pyorchestra.models import NotificationRecord, SchedulerIntervals, SchedulerTickFailure
from pyorchestra.storage import InMemoryRecordStore, RecordStore

logger = logging.getLogger(__name__)

__all__ = [
    "PeriodicScheduler",
    "random_notifications",
    "Generator",
    "Clock",
    "ErrorSink",
]

Generator = Callable[[int], Iterable[str] | Awaitable[Iterable[str]]]
"""Receives the current record count, returns messages for new records."""

Clock = Callable[[], datetime]

ErrorSink = Callable[[SchedulerTickFailure], None]

GENERATE_TASK = "generate"
CLEANUP_TASK = "cleanup"


def random_notifications(existing: int, max_count: int = 2) -> list[str]:
    """Default generator: between 0 and max_count synthetic notifications.

    Messages are numbered after the records already stored.
    """
    count = random.randint(0, max_count)
    return [f"Notification {existing + i + 1}" for i in range(count)]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class PeriodicScheduler:
    """Background notification feed with explicit start/stop lifecycle.

    Design Patterns:
    - Builder: with_*() methods configure before start()
    - Strategy: generator, clock and error sink are injected

    The periodic tasks are owned by the scheduler and kept in its
    active-task dict until stop() cancels them. Records survive stop().

    Example:
        ```python
        scheduler = PeriodicScheduler(generator=lambda n: ["order ready"])
        await scheduler.start()
        await asyncio.sleep(1)
        await scheduler.stop()
        print(await scheduler.list())
        ```
    """

    def __init__(
        self,
        store: RecordStore | None = None,
        generator: Generator | None = None,
        clock: Clock | None = None,
        intervals: SchedulerIntervals | None = None,
    ):
        """Initialize a stopped scheduler.

        Args:
            store: Record store (defaults to a new InMemoryRecordStore)
            generator: Message generator (defaults to random_notifications)
            clock: Returns the current aware datetime (defaults to UTC now)
            intervals: Timing configuration (defaults to SchedulerIntervals())
        """
        self._store = store if store is not None else InMemoryRecordStore()
        self._generator: Generator = generator if generator is not None else random_notifications
        self._clock: Clock = clock if clock is not None else _utcnow
        self._intervals = intervals if intervals is not None else SchedulerIntervals()
        self._error_sink: ErrorSink | None = None

        self._running = False
        self._run_id = 0
        self._tasks: dict[str, asyncio.Task] = {}

    # =========================================================================
    # Builder methods
    # =========================================================================

    def with_intervals(self, intervals: SchedulerIntervals) -> "PeriodicScheduler":
        """Replace the whole timing configuration.

        Takes effect on the next start().
        """
        self._intervals = intervals
        return self

    def with_generate_interval(self, seconds: float) -> "PeriodicScheduler":
        self._intervals = self._intervals.with_generate_interval(seconds)
        return self

    def with_cleanup_interval(self, seconds: float) -> "PeriodicScheduler":
        self._intervals = self._intervals.with_cleanup_interval(seconds)
        return self

    def with_retention(self, seconds: float) -> "PeriodicScheduler":
        self._intervals = self._intervals.with_retention(seconds)
        return self

    def with_error_sink(self, sink: ErrorSink) -> "PeriodicScheduler":
        """Receive every SchedulerTickFailure in addition to the log entry."""
        self._error_sink = sink
        return self

    def from_env(self) -> "PeriodicScheduler":
        """Load timing from PYORCHESTRA_* environment variables."""
        self._intervals = SchedulerIntervals.from_env()
        return self

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def start(self) -> None:
        """Start generating and pruning.

        No-op if already running. Otherwise runs one generation pass right
        away, then starts the generate and cleanup tasks.
        """
        if self._running:
            return

        self._running = True
        self._run_id += 1
        run_id = self._run_id
        intervals = self._intervals
        logger.info(
            f"Scheduler started: generate every {intervals.generate_interval}s, "
            f"cleanup every {intervals.cleanup_interval}s, retention {intervals.retention}s"
        )

        await self._run_tick(GENERATE_TASK, self.generate_once)

        # stop(), possibly followed by another start(), may have run during the first pass
        if not self._running or run_id != self._run_id or self._tasks:
            return

        self._tasks[GENERATE_TASK] = asyncio.create_task(
            self._run_periodic(GENERATE_TASK, intervals.generate_interval, self.generate_once),
            name=f"scheduler:{GENERATE_TASK}",
        )
        self._tasks[CLEANUP_TASK] = asyncio.create_task(
            self._run_periodic(CLEANUP_TASK, intervals.cleanup_interval, self.cleanup_once),
            name=f"scheduler:{CLEANUP_TASK}",
        )

    async def stop(self) -> None:
        """Cancel the periodic tasks and wait until they have ended.

        Records are kept. Calling stop() on a stopped scheduler does nothing.
        """
        if not self._running and not self._tasks:
            return

        self._running = False
        tasks = list(self._tasks.values())
        self._tasks.clear()

        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

        logger.info("Scheduler stopped")

    def is_running(self) -> bool:
        return self._running

    def active_tasks(self) -> list[str]:
        """Names of the periodic tasks currently owned by the scheduler."""
        return list(self._tasks)

    async def list(self) -> list[NotificationRecord]:
        """Return a point-in-time copy of the records, oldest first."""
        return await self._store.snapshot()

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def intervals(self) -> SchedulerIntervals:
        return self._intervals

    # =========================================================================
    # Ticks
    # =========================================================================

    async def generate_once(self) -> int:
        """Run one generation pass. Returns the number of records appended."""
        if not self._running:
            return 0

        existing = await self._store.count()
        messages = self._generator(existing)
        if inspect.isawaitable(messages):
            messages = await messages

        now = self._clock()
        records = [NotificationRecord(message=m, created_at=now) for m in messages]
        if not records:
            return 0

        appended = await self._store.append_many(records)
        logger.debug(f"Generated {appended} notifications")
        return appended

    async def cleanup_once(self) -> int:
        """Run one cleanup pass. Returns the number of records removed."""
        removed = await self._store.prune_older_than(
            self._clock(), self._intervals.retention_window
        )
        if removed:
            logger.debug(f"Pruned {removed} expired notifications")
        return removed

    async def _run_periodic(
        self, name: str, interval: float, tick: Callable[[], Awaitable[int]]
    ) -> None:
        """Sleep-then-tick loop. Runs until cancelled by stop()."""
        while self._running:
            await asyncio.sleep(interval)
            if not self._running:
                break
            await self._run_tick(name, tick)

    async def _run_tick(self, name: str, tick: Callable[[], Awaitable[int]]) -> None:
        """Run one tick, isolating failures from the schedule."""
        try:
            await tick()
        except Exception as e:
            failure = SchedulerTickFailure(name, e)
            logger.error(f"Scheduler {failure}")
            self._report(failure)

    def _report(self, failure: SchedulerTickFailure) -> None:
        if self._error_sink is None:
            return
        try:
            self._error_sink(failure)
        except Exception as e:
            logger.error(f"Scheduler error sink failed while reporting {failure.task_name!r}: {e}")
