"""In-memory record store.

Design Pattern: Adapter Pattern
InMemoryRecordStore adapts a list plus an id index to the RecordStore
interface.

Instance is immediately usable after __init__.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from datetime import datetime, timedelta

from pyorchestra.models import DuplicateRecordError, NotificationRecord
from pyorchestra.storage.base import RecordStore


class InMemoryRecordStore(RecordStore):
    """In-memory store shared by the scheduler's generate and cleanup tasks.

    Every method takes the same asyncio.Lock, so an append and a prune
    never interleave and a snapshot sees either all or none of a change.

    Usage:
        store = InMemoryRecordStore()
        await store.append_many([NotificationRecord("hello")])
        records = await store.snapshot()
    """

    def __init__(self):
        """Initialize empty storage."""
        # Ordered records, oldest first
        self._records: list[NotificationRecord] = []

        # Index: ids currently stored
        self._ids: set[str] = set()

        self._lock = asyncio.Lock()

    def __repr__(self) -> str:
        return f"InMemoryRecordStore(records={len(self._records)})"

    async def append_many(self, records: Iterable[NotificationRecord]) -> int:
        batch = list(records)
        async with self._lock:
            seen: set[str] = set()
            for record in batch:
                if record.id in self._ids or record.id in seen:
                    raise DuplicateRecordError(record.id)
                seen.add(record.id)

            self._records.extend(batch)
            self._ids.update(seen)
            return len(batch)

    async def prune_older_than(self, now: datetime, retention: timedelta) -> int:
        async with self._lock:
            kept = [r for r in self._records if not r.is_expired(now, retention)]
            removed = len(self._records) - len(kept)
            if removed:
                self._records = kept
                self._ids = {r.id for r in kept}
            return removed

    async def snapshot(self) -> list[NotificationRecord]:
        async with self._lock:
            return list(self._records)

    async def count(self) -> int:
        async with self._lock:
            return len(self._records)

    async def clear(self) -> None:
        async with self._lock:
            self._records.clear()
            self._ids.clear()
