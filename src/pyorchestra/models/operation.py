"""
The Operation abstraction.

An Operation is any zero-argument callable returning an awaitable. It
succeeds by producing a value and fails by raising. The executors call
it as many times as they need; each call is independent.

Callback-style functions (last argument is an error-first callback) are
adapted with operation_from_callback().
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

T = TypeVar("T")

Operation = Callable[[], Awaitable[T]]
"""Zero-argument async callable producing a result or raising."""


def operation_from_callback(func: Callable[..., Any], *args: Any) -> Operation[Any]:
    """
    Adapt an error-first callback function into an Operation.

    ``func`` is called as ``func(*args, callback)``; the callback receives
    ``(error, result)``. A non-None error becomes a raised exception,
    otherwise the result is the operation's value. The callback may be
    invoked from another thread. Only the first callback invocation counts.

    Args:
        func: Function taking a trailing ``callback(error, result)`` argument
        *args: Leading arguments passed to func on every call

    Returns:
        Operation that runs func once per call

    Example:
        ```python
        def send_sms(number, message, callback):
            ...
            callback(None, f"SMS sent to {number}")

        op = operation_from_callback(send_sms, "0600000000", "Order ready")
        result = await op()
        ```
    """

    async def operation() -> Any:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[Any] = loop.create_future()

        def settle(error: BaseException | None, result: Any = None) -> None:
            if future.done():
                return
            if error is not None:
                if not isinstance(error, BaseException):
                    error = Exception(str(error))
                future.set_exception(error)
            else:
                future.set_result(result)

        def callback(error: BaseException | None = None, result: Any = None) -> None:
            if loop.is_closed():
                return
            try:
                running = asyncio.get_running_loop()
            except RuntimeError:
                running = None
            if running is loop:
                settle(error, result)
            else:
                loop.call_soon_threadsafe(settle, error, result)

        try:
            func(*args, callback)
        except Exception as e:
            settle(e)

        return await future

    return operation
