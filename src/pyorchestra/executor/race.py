"""Racing operations against each other or against a deadline.

All participants start as tasks in listed order. The first one to settle
decides the outcome; the rest are cancelled and their results discarded.

Tie-break: when several participants are found settled in the same
wake-up of the event loop, the one listed first wins. with_timeout()
lists the operation before the deadline, so an operation that finishes
without suspending beats a zero timeout.
"""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pyorchestra.executor.outcome import RaceOutcome
from pyorchestra.models import Operation, ParticipantError, TimeoutExceeded

logger = logging.getLogger(__name__)

T = TypeVar("T")

PRIMARY_LABEL = "primary"
TIMEOUT_LABEL = "timeout"

__all__ = [
    "RaceParticipant",
    "race",
    "with_timeout",
    "timeout_participant",
    "PRIMARY_LABEL",
    "TIMEOUT_LABEL",
]


@dataclass(frozen=True)
class RaceParticipant(Generic[T]):
    """
    An operation entered in a race under a label.

    Attributes:
        label: Identifies the participant in outcomes and errors
        operation: Zero-argument async callable
    """

    label: str
    operation: Operation[T]


def timeout_participant(timeout: float, label: str = TIMEOUT_LABEL) -> RaceParticipant[Any]:
    """Build a participant that fails with TimeoutExceeded after ``timeout`` seconds.

    Raises:
        ValueError: If timeout is negative
    """
    if timeout < 0:
        raise ValueError(f"timeout must be >= 0, got {timeout}")

    async def deadline() -> Any:
        await asyncio.sleep(timeout)
        raise TimeoutExceeded(timeout)

    return RaceParticipant(label=label, operation=deadline)


def _start(participant: RaceParticipant[T]) -> asyncio.Task:
    async def run() -> T:
        return await participant.operation()

    return asyncio.create_task(run(), name=f"race:{participant.label}")


def _discard(task: asyncio.Task) -> None:
    """Consume a losing task's outcome so it never surfaces."""
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.debug(f"Discarded failure from losing participant {task.get_name()}: {error}")


async def race(participants: Sequence[RaceParticipant[T]]) -> RaceOutcome[T]:
    """Run participants concurrently and resolve with the first to settle.

    Args:
        participants: Non-empty, ordered participants

    Returns:
        RaceOutcome with the winner's label and result

    Raises:
        ValueError: If participants is empty
        ParticipantError: If the winner failed (chained from its error)

    Example:
        ```python
        outcome = await race([
            RaceParticipant("slow", lambda: slow_service(data)),
            RaceParticipant("fast", lambda: fast_service(data)),
        ])
        print(outcome.label, outcome.result)
        ```
    """
    if not participants:
        raise ValueError("race requires at least one participant")

    tasks: list[asyncio.Task] = []
    try:
        for participant in participants:
            tasks.append(_start(participant))

        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        for task in tasks:
            task.cancel()
            task.add_done_callback(_discard)
        raise

    winner_index = min(i for i, task in enumerate(tasks) if task in done)
    winner = tasks[winner_index]
    label = participants[winner_index].label

    for i, task in enumerate(tasks):
        if i == winner_index:
            continue
        if not task.done():
            task.cancel()
        task.add_done_callback(_discard)

    if winner.cancelled():
        raise ParticipantError(label, asyncio.CancelledError())

    error = winner.exception()
    if error is not None:
        logger.debug(f"Race won by failing participant {label!r}: {error}")
        raise ParticipantError(label, error) from error

    logger.debug(f"Race won by participant {label!r}")
    return RaceOutcome(label=label, result=winner.result())


async def with_timeout(operation: Operation[T], timeout: float) -> RaceOutcome[T]:
    """Run an operation with a deadline.

    Args:
        operation: Zero-argument async callable
        timeout: Seconds before TimeoutExceeded is raised; 0 means immediate

    Returns:
        RaceOutcome labelled "primary" carrying the operation's value

    Raises:
        TimeoutExceeded: The deadline fired first
        ValueError: If timeout is negative
        Exception: The operation's own error if it failed first

    Example:
        ```python
        try:
            outcome = await with_timeout(lambda: slow_service(data), 0.5)
            print(outcome.result)
        except TimeoutExceeded:
            ...
        ```
    """
    try:
        outcome = await race(
            [
                RaceParticipant(label=PRIMARY_LABEL, operation=operation),
                timeout_participant(timeout),
            ]
        )
    except ParticipantError as e:
        raise e.cause from None

    return outcome
