"""
Abstract record store interface.

Design Pattern: Adapter Pattern
RecordStore is the interface the periodic scheduler writes through.
Implementations adapt a concrete container to it.

All methods are async so an implementation can serialize access with an
asyncio.Lock without changing callers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime, timedelta

from pyorchestra.models import NotificationRecord

__all__ = ["RecordStore"]


class RecordStore(ABC):
    """
    Ordered collection of notification records.

    Contract:
    - Records keep insertion order
    - No two records share an id
    - snapshot() returns a point-in-time copy, never a live view
    """

    @abstractmethod
    async def append_many(self, records: Iterable[NotificationRecord]) -> int:
        """
        Append records atomically.

        Either every record is appended or none is.

        Returns:
            Number of records appended

        Raises:
            DuplicateRecordError: If an id is already stored or repeated in records
        """
        ...

    @abstractmethod
    async def prune_older_than(self, now: datetime, retention: timedelta) -> int:
        """
        Remove records strictly older than the retention window.

        A record is removed when ``now - created_at > retention``.

        Returns:
            Number of records removed
        """
        ...

    @abstractmethod
    async def snapshot(self) -> list[NotificationRecord]:
        """Return a copy of all records in insertion order."""
        ...

    @abstractmethod
    async def count(self) -> int:
        """Return the number of stored records."""
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Remove every record."""
        ...
