"""
Execution outcomes for the retry and race executors.

**Design Pattern**: State Machine using Union types

RetryOutcome makes the end state explicit instead of hiding the attempt
count inside an exception: a retried operation either succeeded or
failed, and both carry how many attempts it took.

Example:
    ```python
    outcome = await execute_with_retry(op, RetryPolicy.fixed(3, 10))

    match outcome:
        case Success(result, attempts_used):
            print(f"Done after {attempts_used} attempts: {result}")
        case Failure(error, attempts_used):
            print(f"Gave up after {attempts_used} attempts: {error}")
    ```
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

__all__ = [
    "Success",
    "Failure",
    "RetryOutcome",
    "RaceOutcome",
    "is_success",
    "is_failure",
]

R = TypeVar("R")


@dataclass(frozen=True)
class Success(Generic[R]):
    """
    The operation produced a value.

    Attributes:
        result: The value returned by the successful attempt
        attempts_used: Attempts made, including the successful one
    """

    result: R
    attempts_used: int

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> R:
        """Return the result."""
        return self.result

    def __str__(self) -> str:
        return f"Success(result={self.result!r}, attempts_used={self.attempts_used})"


@dataclass(frozen=True)
class Failure:
    """
    The operation did not succeed within the retry budget.

    ``error`` is a RetryExhausted when the budget ran out, or the
    operation's own error when it was marked non-retryable.

    Attributes:
        error: Terminal error
        attempts_used: Attempts made before giving up
    """

    error: BaseException
    attempts_used: int

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def unwrap(self) -> Any:
        """Raise the terminal error."""
        raise self.error

    def __str__(self) -> str:
        return (
            f"Failure(error={type(self.error).__name__}: {self.error}, "
            f"attempts_used={self.attempts_used})"
        )


RetryOutcome = Success[R] | Failure


@dataclass(frozen=True)
class RaceOutcome(Generic[R]):
    """
    Result of the first race participant to settle successfully.

    Attributes:
        label: Label of the winning participant
        result: Value produced by the winner
    """

    label: str
    result: R

    def __str__(self) -> str:
        return f"RaceOutcome(label={self.label!r}, result={self.result!r})"


def is_success(outcome: RetryOutcome[R]) -> bool:
    """Type guard to check if a retry outcome is a Success."""
    return isinstance(outcome, Success)


def is_failure(outcome: RetryOutcome[R]) -> bool:
    """Type guard to check if a retry outcome is a Failure."""
    return isinstance(outcome, Failure)
