from __future__ import annotations

import pytest

from shared.retry import RetryConfig, call_with_retry


def test_retries_retryable_exception() -> None:
    attempts = []
    sleeps: list[float] = []

    def _fn() -> str:
        attempts.append(1)
        if len(attempts) < 3:
            raise ConnectionError("boom")
        return "ok"

    result = call_with_retry(
        "op",
        _fn,
        is_retryable_exception=lambda exc: isinstance(exc, ConnectionError),
        sleep=sleeps.append,
    )

    assert result == "ok"
    assert len(attempts) == 3
    assert len(sleeps) == 2
    assert sleeps[1] > sleeps[0]


def test_non_retryable_exception_propagates_immediately() -> None:
    sleeps: list[float] = []

    def _fn() -> str:
        raise KeyError("nope")

    with pytest.raises(KeyError):
        call_with_retry("op", _fn, is_retryable_exception=lambda exc: False, sleep=sleeps.append)
    assert sleeps == []


def test_retryable_result_returned_on_last_attempt() -> None:
    results = iter([500, 500])

    out = call_with_retry(
        "op",
        lambda: next(results),
        is_retryable_exception=lambda exc: False,
        is_retryable_result=lambda r: r >= 500,
        config=RetryConfig(max_attempts=2),
        sleep=lambda _: None,
    )
    assert out == 500

