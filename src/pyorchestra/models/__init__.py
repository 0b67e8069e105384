"""Core data models for task orchestration.

Defines retry configuration, the error taxonomy, the Operation
abstraction, notification records and scheduler intervals.

Design: Dependency-Free Models
These types have no dependencies on executor or storage modules to
prevent circular imports and enable clean layering.
"""

from pyorchestra.models.config import SchedulerIntervals
from pyorchestra.models.errors import (
    DuplicateRecordError,
    OperationFailure,
    OrchestrationError,
    ParticipantError,
    RetryExhausted,
    SchedulerTickFailure,
    TimeoutExceeded,
)
from pyorchestra.models.notification import NotificationRecord
from pyorchestra.models.operation import Operation, operation_from_callback
from pyorchestra.models.retry import RetryableError, RetryPolicy, is_retryable

__all__ = [
    "RetryPolicy",
    "RetryableError",
    "is_retryable",
    "Operation",
    "operation_from_callback",
    "NotificationRecord",
    "SchedulerIntervals",
    "OrchestrationError",
    "OperationFailure",
    "RetryExhausted",
    "TimeoutExceeded",
    "ParticipantError",
    "SchedulerTickFailure",
    "DuplicateRecordError",
]
