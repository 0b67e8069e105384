"""
How many times an operation is attempted and how long to wait in between.

A RetryPolicy is plain data; execute_with_retry() reads it through
delay_for_attempt() and never looks at the fields directly. Errors decide
for themselves whether another attempt makes sense by subclassing
RetryableError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class RetryPolicy:
    """
    Attempt budget and delay schedule for one retried operation.

    The delay after failed attempt ``k`` is
    ``min(initial_delay_ms * backoff_multiplier ** (k - 1), max_delay_ms)``.
    With the default multiplier of 1.0 every wait is the same.

    Examples:
        RetryPolicy.fixed(max_attempts=3, delay_ms=50)
        RetryPolicy.STANDARD
        RetryPolicy(max_attempts=5, initial_delay_ms=100, max_delay_ms=5000,
                    backoff_multiplier=2.0)
    """

    max_attempts: int
    """Total attempts, the first one included. Must be at least 1."""

    initial_delay_ms: int = 0
    max_delay_ms: int = 60000
    backoff_multiplier: float = 1.0

    NONE: ClassVar[RetryPolicy]
    STANDARD: ClassVar[RetryPolicy]
    AGGRESSIVE: ClassVar[RetryPolicy]

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.initial_delay_ms < 0:
            raise ValueError(f"initial_delay_ms must be >= 0, got {self.initial_delay_ms}")
        if self.max_delay_ms < self.initial_delay_ms:
            raise ValueError(
                f"max_delay_ms ({self.max_delay_ms}) must be >= "
                f"initial_delay_ms ({self.initial_delay_ms})"
            )
        if self.backoff_multiplier < 1.0:
            raise ValueError(
                f"backoff_multiplier must be >= 1.0, got {self.backoff_multiplier}"
            )

    @classmethod
    def with_max_attempts(cls, max_attempts: int) -> RetryPolicy:
        """Same one-second fixed delay as STANDARD, with a different budget."""
        return cls.fixed(max_attempts, 1000)

    @classmethod
    def fixed(cls, max_attempts: int, delay_ms: int) -> RetryPolicy:
        return cls(
            max_attempts=max_attempts,
            initial_delay_ms=delay_ms,
            max_delay_ms=delay_ms,
            backoff_multiplier=1.0,
        )

    def delay_for_attempt(self, attempt: int) -> int | None:
        """
        Milliseconds to wait after ``attempt`` (1-indexed) has failed.

        Returns None once the budget is spent, which tells the executor to
        give up instead of sleeping.

        >>> RetryPolicy.fixed(3, 10).delay_for_attempt(2)
        10
        >>> RetryPolicy.fixed(3, 10).delay_for_attempt(3) is None
        True
        """
        if attempt >= self.max_attempts:
            return None

        delay_ms = self.initial_delay_ms * (self.backoff_multiplier ** (attempt - 1))
        return int(min(delay_ms, self.max_delay_ms))

    def __repr__(self) -> str:
        return (
            f"RetryPolicy(max_attempts={self.max_attempts}, "
            f"initial_delay_ms={self.initial_delay_ms}, "
            f"max_delay_ms={self.max_delay_ms}, "
            f"backoff_multiplier={self.backoff_multiplier})"
        )


# Single attempt, no waiting
RetryPolicy.NONE = RetryPolicy(max_attempts=1, initial_delay_ms=0, max_delay_ms=0)

# Three attempts one second apart
RetryPolicy.STANDARD = RetryPolicy.fixed(max_attempts=3, delay_ms=1000)

# Ten attempts from 100ms growing by 1.5x, capped at 10s
RetryPolicy.AGGRESSIVE = RetryPolicy(
    max_attempts=10,
    initial_delay_ms=100,
    max_delay_ms=10000,
    backoff_multiplier=1.5,
)


class RetryableError(Exception):
    """
    Error that knows whether retrying can help.

    Raise a subclass that returns False from is_retryable() for permanent
    failures (bad input, out of stock) so the executor stops at once and
    hands the error back unchanged.
    """

    def is_retryable(self) -> bool:
        return True


def is_retryable(error: BaseException) -> bool:
    """Plain exceptions are retried; RetryableError subclasses decide themselves."""
    if isinstance(error, RetryableError):
        return error.is_retryable()
    return True
