"""Notification record produced by the periodic scheduler."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from uuid_extensions import uuid7


@dataclass(frozen=True)
class NotificationRecord:
    """
    A time-stamped notification.

    Records are immutable: the store only appends or removes them.
    Ids are UUIDv7, so they sort by creation time and never collide.

    Attributes:
        message: Notification text
        created_at: Timezone-aware creation time
        id: Unique identifier (generated when omitted)
    """

    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    id: str = field(default_factory=lambda: str(uuid7()))

    def age(self, now: datetime) -> timedelta:
        """Return how long ago the record was created, relative to now."""
        return now - self.created_at

    def is_expired(self, now: datetime, retention: timedelta) -> bool:
        """Return True when the record is strictly older than the retention window."""
        return self.age(now) > retention
