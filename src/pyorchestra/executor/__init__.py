"""
Executor module - Runtime engine for asynchronous orchestration.

This module contains the execution components:
- retry: Retry-with-backoff execution of a fallible operation
- race: First-to-settle racing and timeouts
- parallel: All-or-nothing concurrent execution
- outcome: RetryOutcome state machine (Success/Failure) and RaceOutcome
- scheduler: Periodic background generation and pruning of records
"""

from pyorchestra.executor.outcome import (
    Failure,
    RaceOutcome,
    RetryOutcome,
    Success,
    is_failure,
    is_success,
)
from pyorchestra.executor.parallel import gather_all
from pyorchestra.executor.race import RaceParticipant, race, timeout_participant, with_timeout
from pyorchestra.executor.retry import execute_with_retry, retry
from pyorchestra.executor.scheduler import PeriodicScheduler, random_notifications

__all__ = [
    # Retry
    "execute_with_retry",
    "retry",
    # Outcomes
    "Success",
    "Failure",
    "RetryOutcome",
    "RaceOutcome",
    "is_success",
    "is_failure",
    # Race
    "RaceParticipant",
    "race",
    "with_timeout",
    "timeout_participant",
    # Parallel
    "gather_all",
    # Scheduler
    "PeriodicScheduler",
    "random_notifications",
]
