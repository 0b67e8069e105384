"""Tests for RetryPolicy configuration and delay calculation."""

import dataclasses

import pytest

from pyorchestra.models import OperationFailure, RetryableError, RetryPolicy, is_retryable


def test_fixed_policy_uses_same_delay_every_attempt():
    policy = RetryPolicy.fixed(max_attempts=4, delay_ms=25)

    assert policy.delay_for_attempt(1) == 25
    assert policy.delay_for_attempt(2) == 25
    assert policy.delay_for_attempt(3) == 25
    assert policy.delay_for_attempt(4) is None


def test_exponential_backoff_is_capped():
    policy = RetryPolicy(
        max_attempts=6, initial_delay_ms=100, max_delay_ms=500, backoff_multiplier=2.0
    )

    assert policy.delay_for_attempt(1) == 100
    assert policy.delay_for_attempt(2) == 200
    assert policy.delay_for_attempt(3) == 400
    assert policy.delay_for_attempt(4) == 500
    assert policy.delay_for_attempt(5) == 500
    assert policy.delay_for_attempt(6) is None


def test_single_attempt_policy_never_delays():
    assert RetryPolicy.NONE.max_attempts == 1
    assert RetryPolicy.NONE.delay_for_attempt(1) is None


def test_standard_policy_matches_defaults():
    """Standard policy: 3 attempts, one second apart."""
    assert RetryPolicy.STANDARD.max_attempts == 3
    assert RetryPolicy.STANDARD.delay_for_attempt(1) == 1000
    assert RetryPolicy.STANDARD.delay_for_attempt(2) == 1000


def test_with_max_attempts():
    policy = RetryPolicy.with_max_attempts(5)
    assert policy.max_attempts == 5
    assert policy.delay_for_attempt(4) == 1000


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_attempts": 0},
        {"max_attempts": 3, "initial_delay_ms": -1},
        {"max_attempts": 3, "initial_delay_ms": 100, "max_delay_ms": 50},
        {"max_attempts": 3, "backoff_multiplier": 0.5},
    ],
)
def test_invalid_policy_rejected(kwargs):
    with pytest.raises(ValueError):
        RetryPolicy(**kwargs)


def test_policy_is_immutable():
    policy = RetryPolicy.fixed(3, 10)
    with pytest.raises(AttributeError):
        policy.max_attempts = 5  # type: ignore[misc]


def test_retryability_classification():
    class PermanentError(RetryableError):
        def is_retryable(self) -> bool:
            return False

    assert is_retryable(ValueError("plain errors are retryable"))
    assert is_retryable(OperationFailure("transient"))
    assert not is_retryable(OperationFailure("permanent", retryable=False))
    assert not is_retryable(PermanentError())


def test_named_policies_are_class_level_not_fields():
    field_names = {f.name for f in dataclasses.fields(RetryPolicy)}

    assert field_names == {"max_attempts", "initial_delay_ms", "max_delay_ms", "backoff_multiplier"}
    assert RetryPolicy.NONE == RetryPolicy(max_attempts=1, initial_delay_ms=0, max_delay_ms=0)
    assert RetryPolicy.AGGRESSIVE.delay_for_attempt(2) == 150
