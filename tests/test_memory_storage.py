"""Tests for the in-memory record store."""

import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from pyorchestra.models import DuplicateRecordError, NotificationRecord
from pyorchestra.storage import InMemoryRecordStore

T0 = datetime(2024, 1, 1, tzinfo=UTC)


def _record(message: str, age_seconds: float, now: datetime = T0) -> NotificationRecord:
    return NotificationRecord(message=message, created_at=now - timedelta(seconds=age_seconds))


@pytest.mark.asyncio
async def test_append_keeps_insertion_order(store):
    records = [_record(f"n{i}", 0) for i in range(5)]

    assert await store.append_many(records) == 5

    snapshot = await store.snapshot()
    assert [r.message for r in snapshot] == ["n0", "n1", "n2", "n3", "n4"]
    assert await store.count() == 5


@pytest.mark.asyncio
async def test_duplicate_id_rejected_atomically(store):
    first = NotificationRecord(message="first", id="same")
    await store.append_many([first])

    with pytest.raises(DuplicateRecordError) as exc_info:
        await store.append_many([NotificationRecord(message="new"), NotificationRecord("x", id="same")])

    assert exc_info.value.record_id == "same"
    # Nothing from the failed batch was appended
    assert [r.message for r in await store.snapshot()] == ["first"]


@pytest.mark.asyncio
async def test_duplicate_within_batch_rejected(store):
    with pytest.raises(DuplicateRecordError):
        await store.append_many([NotificationRecord("a", id="dup"), NotificationRecord("b", id="dup")])

    assert await store.count() == 0


@pytest.mark.asyncio
async def test_prune_removes_only_expired(store):
    await store.append_many(
        [
            _record("old", 3601),
            _record("boundary", 3600),
            _record("fresh", 10),
        ]
    )

    removed = await store.prune_older_than(T0, timedelta(hours=1))

    assert removed == 1
    assert [r.message for r in await store.snapshot()] == ["boundary", "fresh"]


@pytest.mark.asyncio
async def test_pruned_id_can_be_reused(store):
    await store.append_many([NotificationRecord("old", created_at=T0 - timedelta(days=1), id="x")])
    await store.prune_older_than(T0, timedelta(hours=1))

    await store.append_many([NotificationRecord("new", created_at=T0, id="x")])
    assert [r.message for r in await store.snapshot()] == ["new"]


@pytest.mark.asyncio
async def test_snapshot_is_a_copy(store):
    await store.append_many([_record("a", 0)])

    snapshot = await store.snapshot()
    snapshot.clear()

    assert await store.count() == 1


@pytest.mark.asyncio
async def test_clear(store):
    await store.append_many([_record("a", 0), _record("b", 0)])
    await store.clear()

    assert await store.snapshot() == []


@pytest.mark.concurrency
@pytest.mark.asyncio
async def test_concurrent_appends_and_prunes_lose_nothing():
    """Concurrent writers and pruners never lose fresh records."""
    store = InMemoryRecordStore()
    num_writers = 10
    writes_per_writer = 20

    async def writer(writer_id: int):
        for i in range(writes_per_writer):
            await store.append_many(
                [_record(f"w{writer_id}-{i}", 0), _record(f"w{writer_id}-{i}-old", 7200)]
            )
            if i % 5 == 0:
                await asyncio.sleep(0)

    async def pruner():
        for _ in range(50):
            await store.prune_older_than(T0, timedelta(hours=1))
            await asyncio.sleep(0)

    await asyncio.gather(*[writer(i) for i in range(num_writers)], pruner())
    await store.prune_older_than(T0, timedelta(hours=1))

    snapshot = await store.snapshot()
    assert len(snapshot) == num_writers * writes_per_writer
    assert len({r.id for r in snapshot}) == len(snapshot)
    assert all(not r.message.endswith("-old") for r in snapshot)
