"""All-or-nothing parallel execution.

Runs operations concurrently and collects every result in input order.
The first failure cancels the operations still running and is raised to
the caller; the remaining results are discarded.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import TypeVar

from pyorchestra.models import Operation, OperationFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")

__all__ = ["gather_all"]


async def gather_all(operations: Sequence[Operation[T]]) -> list[T]:
    """Run operations concurrently, failing fast on the first error.

    Total time is that of the slowest operation when all succeed.

    Args:
        operations: Zero-argument async callables

    Returns:
        Results in the same order as operations

    Raises:
        Exception: The first failure; sibling operations are cancelled
        OperationFailure: An operation cancelled itself (not retryable)

    Example:
        ```python
        dishes = await gather_all([
            lambda: prepare("Vegetables", 0.2),
            lambda: prepare("Meat", 0.3),
        ])
        ```
    """
    if not operations:
        return []

    async def run(operation: Operation[T]) -> T:
        return await operation()

    tasks = [asyncio.create_task(run(op), name=f"gather:{i}") for i, op in enumerate(operations)]
    pending = set(tasks)

    try:
        while pending:
            done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_EXCEPTION)

            # Report the earliest-listed failure among those settled together
            failed = [t for t in tasks if t in done and (t.cancelled() or t.exception())]
            if failed:
                error = _failure_of(failed[0])
                logger.debug(
                    f"Parallel operation {failed[0].get_name()} failed, "
                    f"cancelling {len(pending)} others: {error}"
                )
                raise error
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    return [task.result() for task in tasks]


def _failure_of(task: asyncio.Task) -> BaseException:
    # A task that cancelled itself has no exception to report
    if task.cancelled():
        return OperationFailure(f"Operation {task.get_name()} was cancelled", retryable=False)
    return task.exception()
