import random
import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from shared.logging import get_logger

T = TypeVar("T")

logger = get_logger("retry")


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = 3
    base_delay_seconds: float = 0.5
    max_delay_seconds: float = 8.0
    jitter_ratio: float = 0.30


def _compute_sleep_seconds(attempt: int, config: RetryConfig) -> float:
    exponential = min(config.base_delay_seconds * (2 ** (attempt - 1)), config.max_delay_seconds)
    jitter_multiplier = 1 + random.uniform(0, config.jitter_ratio)
    return exponential * jitter_multiplier


def call_with_retry(
    operation_name: str,
    fn: Callable[[], T],
    is_retryable_exception: Callable[[Exception], bool],
    is_retryable_result: Optional[Callable[[T], bool]] = None,
    config: Optional[RetryConfig] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Run ``fn`` and retry it with jittered exponential backoff.

    A retryable result on the last attempt is returned as-is so the caller can
    surface the real response (e.g. via ``raise_for_status``).
    """
    cfg = config or RetryConfig()

    for attempt in range(1, cfg.max_attempts + 1):
        try:
            result = fn()
        except Exception as exc:  # noqa: BLE001
            if not is_retryable_exception(exc) or attempt == cfg.max_attempts:
                raise
            delay = _compute_sleep_seconds(attempt, cfg)
            logger.warning(
                "github_request_retry",
                extra={"extra": {"operation": operation_name, "attempt": attempt, "error": str(exc)}},
            )
            sleep(delay)
            continue

        if is_retryable_result and is_retryable_result(result) and attempt < cfg.max_attempts:
            logger.warning(
                "github_request_retry",
                extra={"extra": {"operation": operation_name, "attempt": attempt}},
            )
            sleep(_compute_sleep_seconds(attempt, cfg))
            continue
        return result

    raise RuntimeError(f"Retry loop exhausted unexpectedly for {operation_name}")
