from __future__ import annotations

import functools
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Protocol, TypeVar

from ..errors import CompletionError, ErrorCode

T = TypeVar("T")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: CompletionError | None,
    ) -> None: ...


class BeforeRetry(Protocol):  # pragma: no cover - structural protocol
    def __call__(self, *, attempt: int, error: CompletionError) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = 3
    delay_base: float = 2.0  # exponential base (base**attempt); <= 0 disables backoff
    retryable_codes: tuple[ErrorCode, ...] = (
        ErrorCode.TRANSIENT,
        ErrorCode.RATE_LIMIT,
        ErrorCode.TIMEOUT,
    )
    attempt_logger: AttemptLogger | None = None
    before_retry: BeforeRetry | None = None

    def delays(self) -> Iterable[float]:
        for attempt in range(self.max_attempts - 1):
            yield self.delay_base**attempt if self.delay_base > 0 else 0.0


DEFAULT_RETRY_CONFIG = RetryConfig()


def retry(config: RetryConfig = DEFAULT_RETRY_CONFIG):
    """Return a decorator applying standardized retry policy.

    - Retries only ``CompletionError`` with a configured retryable code
    - Exponential backoff using delay_base ** attempt
    - Calls ``before_retry`` once per retry, before sleeping
    - Preserves original function signature
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            last_exc: CompletionError | None = None
            for attempt, delay in enumerate(
                list(config.delays()) + [None]
            ):  # final attempt has delay None
                try:
                    result = func(*args, **kwargs)
                    if config.attempt_logger:
                        config.attempt_logger(
                            attempt=attempt,
                            max_attempts=config.max_attempts,
                            delay=None,
                            error=None,
                        )
                    return result
                except CompletionError as e:
                    last_exc = e
                    will_retry = (e.code in config.retryable_codes) and (delay is not None)
                    if config.attempt_logger:
                        config.attempt_logger(
                            attempt=attempt,
                            max_attempts=config.max_attempts,
                            delay=delay if will_retry else None,
                            error=e,
                        )
                    if not will_retry:
                        raise
                    if config.before_retry:
                        config.before_retry(attempt=attempt, error=e)
                    if delay:
                        time.sleep(delay)
            if last_exc is None:  # pragma: no cover - defensive
                raise RuntimeError(
                    "retry: reached terminal state without captured exception"
                )
            raise last_exc

        return wrapper

    return decorator


__all__ = [
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "retry",
]
