"""Record storage for the periodic scheduler.

Provides storage behind a common interface:
    - RecordStore: Abstract interface
    - InMemoryRecordStore: Lock-protected in-memory storage

Design: Adapter Pattern + Dependency Inversion (SOLID)
    The scheduler depends on the RecordStore abstraction, so a caller can
    supply its own store without changing scheduler code.
"""

from pyorchestra.storage.base import RecordStore
from pyorchestra.storage.memory import InMemoryRecordStore

__all__ = [
    "RecordStore",
    "InMemoryRecordStore",
]
