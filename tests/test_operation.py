"""Tests for adapting callback-style functions into operations."""

import asyncio
import threading

import pytest

from pyorchestra.executor import execute_with_retry, with_timeout
from pyorchestra.models import RetryPolicy, TimeoutExceeded, operation_from_callback


def send_sms(number, message, callback):
    """Error-first callback function settling on the event loop."""

    def deliver():
        if not number or not message:
            callback(ValueError("Number and message required"))
        else:
            callback(None, f'SMS sent to {number}: "{message}"')

    asyncio.get_running_loop().call_later(0.01, deliver)


def read_file_in_thread(path, callback):
    """Error-first callback function settling from another thread."""

    def work():
        if "missing" in path:
            callback(FileNotFoundError(path))
        else:
            callback(None, f"Contents of {path}")

    threading.Timer(0.01, work).start()


@pytest.mark.asyncio
async def test_callback_success():
    op = operation_from_callback(send_sms, "0600000000", "Order ready")
    assert await op() == 'SMS sent to 0600000000: "Order ready"'


@pytest.mark.asyncio
async def test_callback_error_is_raised():
    op = operation_from_callback(send_sms, "", "Order ready")
    with pytest.raises(ValueError, match="required"):
        await op()


@pytest.mark.asyncio
async def test_callback_from_other_thread():
    assert await operation_from_callback(read_file_in_thread, "menu.txt")() == "Contents of menu.txt"

    with pytest.raises(FileNotFoundError):
        await operation_from_callback(read_file_in_thread, "missing.txt")()


@pytest.mark.asyncio
async def test_synchronous_callback_and_raise():
    def immediate(callback):
        callback(None, "now")

    def raising(callback):
        raise RuntimeError("invalid parameters")

    assert await operation_from_callback(immediate)() == "now"
    with pytest.raises(RuntimeError, match="invalid parameters"):
        await operation_from_callback(raising)()


@pytest.mark.asyncio
async def test_only_first_callback_counts():
    def twice(callback):
        callback(None, "first")
        callback(ValueError("second"))

    assert await operation_from_callback(twice)() == "first"


@pytest.mark.asyncio
async def test_callback_operation_composes_with_executors():
    attempts = 0

    def flaky(callback):
        nonlocal attempts
        attempts += 1
        if attempts < 2:
            callback(ConnectionError("Service unavailable"))
        else:
            callback(None, {"status": "active"})

    outcome = await execute_with_retry(operation_from_callback(flaky), RetryPolicy.fixed(3, 1))
    assert outcome.unwrap() == {"status": "active"}

    def never(callback):
        pass

    with pytest.raises(TimeoutExceeded):
        await with_timeout(operation_from_callback(never), 0.02)
