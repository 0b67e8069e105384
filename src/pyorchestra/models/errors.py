"""Error taxonomy for orchestration.

Operations fail with their own exceptions (or OperationFailure); the
executors wrap or re-raise those so callers always see exactly one
terminal error.
"""

from __future__ import annotations

from pyorchestra.models.retry import RetryableError

__all__ = [
    "OrchestrationError",
    "OperationFailure",
    "RetryExhausted",
    "TimeoutExceeded",
    "ParticipantError",
    "SchedulerTickFailure",
    "DuplicateRecordError",
]


class OrchestrationError(Exception):
    """Base class for errors raised by the orchestration layer itself."""

    pass


class OperationFailure(RetryableError):
    """Failure reported by an operation.

    A convenience error for operations that have nothing more specific to
    raise. The retryable flag lets an operation stop the retry executor
    early.

    Example:
        ```python
        async def check_stock():
            raise OperationFailure("Soup is out of stock", retryable=False)
        ```
    """

    def __init__(self, message: str, retryable: bool = True):
        super().__init__(message)
        self.message = message
        self._retryable = retryable

    def is_retryable(self) -> bool:
        return self._retryable

    def __repr__(self) -> str:
        return f"OperationFailure(message={self.message!r}, retryable={self._retryable})"


class RetryExhausted(OrchestrationError):
    """All attempts allowed by the retry policy failed.

    Attributes:
        attempts: Number of attempts made
        last_error: The error raised by the final attempt
    """

    def __init__(self, attempts: int, last_error: BaseException):
        super().__init__(f"Failed after {attempts} attempts: {last_error}")
        self.attempts = attempts
        self.last_error = last_error

    def __repr__(self) -> str:
        return f"RetryExhausted(attempts={self.attempts}, last_error={self.last_error!r})"


class TimeoutExceeded(OrchestrationError, TimeoutError):
    """The deadline participant of a race settled first."""

    def __init__(self, timeout: float):
        super().__init__(f"Timeout exceeded after {timeout}s")
        self.timeout = timeout


class ParticipantError(OrchestrationError):
    """The first race participant to settle failed.

    Attributes:
        label: Label of the failing participant
        cause: The participant's own exception
    """

    def __init__(self, label: str, cause: BaseException):
        super().__init__(f"Participant {label!r} failed: {cause}")
        self.label = label
        self.cause = cause

    def __repr__(self) -> str:
        return f"ParticipantError(label={self.label!r}, cause={self.cause!r})"


class SchedulerTickFailure(OrchestrationError):
    """A periodic tick failed. Reported to logs and the error sink, never raised."""

    def __init__(self, task_name: str, cause: BaseException):
        super().__init__(f"Tick of {task_name!r} failed: {cause}")
        self.task_name = task_name
        self.cause = cause


class DuplicateRecordError(OrchestrationError):
    """A record with the same id is already stored."""

    def __init__(self, record_id: str):
        super().__init__(f"Record {record_id} already exists")
        self.record_id = record_id
