"""Retry execution of a fallible operation.

Attempts run strictly one after another. Between attempts the caller is
suspended with asyncio.sleep, so other tasks keep running. The delay comes
from RetryPolicy.delay_for_attempt() and is skipped after the last attempt.

Design: Information Hiding (Parnas)
The retry loop lives in one place; retry() and the @with_retry decorator
are thin wrappers that raise instead of returning an outcome.
"""

import asyncio
import logging
from typing import TypeVar

from pyorchestra.executor.outcome import Failure, RetryOutcome, Success
from pyorchestra.models import Operation, RetryExhausted, RetryPolicy, is_retryable

logger = logging.getLogger(__name__)

T = TypeVar("T")

__all__ = ["execute_with_retry", "retry"]


async def execute_with_retry(operation: Operation[T], policy: RetryPolicy) -> RetryOutcome[T]:
    """Run an operation until it succeeds or the retry budget is spent.

    Errors are retryable unless they are a RetryableError whose
    is_retryable() returns False; such an error ends the loop at once and
    is returned unwrapped. Cancellation of the caller is never retried.

    Args:
        operation: Zero-argument async callable
        policy: Attempt budget and delay between attempts

    Returns:
        Success with the result, or Failure carrying RetryExhausted (budget
        spent) or the non-retryable error

    Example:
        ```python
        outcome = await execute_with_retry(check_stock, RetryPolicy.fixed(3, 50))
        if outcome.is_success():
            print(outcome.result)
        ```
    """
    attempt = 1

    while True:
        try:
            result = await operation()
        except Exception as e:
            if not is_retryable(e):
                logger.warning(f"Attempt {attempt} failed with non-retryable error: {e}")
                return Failure(error=e, attempts_used=attempt)

            delay_ms = policy.delay_for_attempt(attempt)
            if delay_ms is None:
                logger.error(f"Giving up after {attempt} attempts: {e}")
                return Failure(error=RetryExhausted(attempt, e), attempts_used=attempt)

            logger.warning(
                f"Attempt {attempt}/{policy.max_attempts} failed: {e} "
                f"(retrying in {delay_ms}ms)"
            )
            await asyncio.sleep(delay_ms / 1000.0)
            attempt += 1
            continue

        if attempt > 1:
            logger.debug(f"Operation succeeded on attempt {attempt}")
        return Success(result=result, attempts_used=attempt)


async def retry(operation: Operation[T], policy: RetryPolicy = RetryPolicy.STANDARD) -> T:
    """Run an operation with retries and return its value.

    Raises:
        RetryExhausted: Every attempt failed (chained from the last error)
        Exception: The operation's own error when it is non-retryable

    Example:
        ```python
        status = await retry(lambda: check_service(url), RetryPolicy.fixed(3, 1000))
        ```
    """
    outcome = await execute_with_retry(operation, policy)

    if isinstance(outcome, Success):
        return outcome.result

    error = outcome.error
    if isinstance(error, RetryExhausted):
        raise error from error.last_error
    raise error
