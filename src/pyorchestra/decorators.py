"""
Decorators applying orchestration to plain async functions.

@with_retry runs every call of the decorated coroutine function through
the retry executor; @with_deadline bounds every call with a timeout.

Example:
    ```python
    class DeliveryService:
        @with_retry(policy=RetryPolicy.fixed(3, 50))
        async def assign_courier(self) -> str:
            ...

        @with_deadline(0.5)
        async def slow_service(self, data) -> str:
            ...
    ```
"""

import functools
from collections.abc import Callable
from typing import Any, TypeVar

from pyorchestra.executor.race import with_timeout
from pyorchestra.executor.retry import retry
from pyorchestra.models import RetryPolicy

F = TypeVar("F", bound=Callable[..., Any])

__all__ = ["with_retry", "with_deadline"]


def with_retry(func: F | None = None, *, policy: RetryPolicy = RetryPolicy.STANDARD) -> F:
    """
    Retry the decorated coroutine function according to a policy.

    Supports both @with_retry and @with_retry(policy=...) syntax. Each call
    re-invokes the function with the same arguments.

    Raises (from the wrapped call):
        RetryExhausted: Every attempt failed
        Exception: A non-retryable error raised by the function
    """

    def decorator(f: F) -> F:
        @functools.wraps(f)
        async def wrapper(*args, **kwargs):
            return await retry(lambda: f(*args, **kwargs), policy)

        wrapper._retry_policy = policy  # type: ignore
        return wrapper  # type: ignore

    if func is not None:
        return decorator(func)
    return decorator  # type: ignore


def with_deadline(timeout: float) -> Callable[[F], F]:
    """
    Bound every call of the decorated coroutine function by ``timeout`` seconds.

    Raises (from the wrapped call):
        TimeoutExceeded: The call did not settle in time
    """
    if timeout < 0:
        raise ValueError(f"timeout must be >= 0, got {timeout}")

    def decorator(f: F) -> F:
        @functools.wraps(f)
        async def wrapper(*args, **kwargs):
            outcome = await with_timeout(lambda: f(*args, **kwargs), timeout)
            return outcome.result

        return wrapper  # type: ignore

    return decorator
