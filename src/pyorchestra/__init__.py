"""
pyorchestra: Asynchronous task orchestration for Python

Retry, race and periodic-scheduling patterns over asyncio.

Design Pattern: Façade Pattern
This module provides a simplified interface to the package, hiding the
layout of models, executors and storage.

Example:
    ```python
    import asyncio
    from pyorchestra import RetryPolicy, execute_with_retry, with_timeout

    async def main():
        outcome = await execute_with_retry(check_stock, RetryPolicy.fixed(3, 50))
        print(outcome)

        dish = await with_timeout(lambda: cook("Pizza"), timeout=0.5)
        print(dish.result)

    asyncio.run(main())
    ```
"""

# Models
from pyorchestra.models import (
    DuplicateRecordError,
    NotificationRecord,
    Operation,
    OperationFailure,
    OrchestrationError,
    ParticipantError,
    RetryableError,
    RetryExhausted,
    RetryPolicy,
    SchedulerIntervals,
    SchedulerTickFailure,
    TimeoutExceeded,
    operation_from_callback,
)

# Storage (Adapter pattern)
from pyorchestra.storage import InMemoryRecordStore, RecordStore

# Execution
from pyorchestra.executor import (
    Failure,
    PeriodicScheduler,
    RaceOutcome,
    RaceParticipant,
    RetryOutcome,
    Success,
    execute_with_retry,
    gather_all,
    race,
    retry,
    with_timeout,
)

# Decorators
from pyorchestra.decorators import with_deadline, with_retry

__version__ = "0.1.0"

__all__ = [
    # Models
    "Operation",
    "operation_from_callback",
    "RetryPolicy",
    "RetryableError",
    "NotificationRecord",
    "SchedulerIntervals",
    # Errors
    "OrchestrationError",
    "OperationFailure",
    "RetryExhausted",
    "TimeoutExceeded",
    "ParticipantError",
    "SchedulerTickFailure",
    "DuplicateRecordError",
    # Storage
    "RecordStore",
    "InMemoryRecordStore",
    # Retry
    "execute_with_retry",
    "retry",
    "RetryOutcome",
    "Success",
    "Failure",
    # Race
    "race",
    "with_timeout",
    "RaceParticipant",
    "RaceOutcome",
    # Parallel
    "gather_all",
    # Scheduler
    "PeriodicScheduler",
    # Decorators
    "with_retry",
    "with_deadline",
    # Metadata
    "__version__",
]
