"""Caller-supplied retry policy for normalized provider errors.

Nothing in the package retries on its own. A caller that wants retries for
``rate_limit``/``transient`` failures passes a :class:`RetryConfig` to the
chat invoker (or decorates its own function with :func:`retry`).
"""
from __future__ import annotations

import functools
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Protocol, TypeVar

from ..errors import ProviderError

T = TypeVar("T")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: ProviderError | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    """Retry policy.

    ``max_attempts`` counts the first call. Delays grow as
    ``delay_base ** attempt`` (1, 2, 4, ... for the default base), capped at
    ``max_delay``. Only errors whose ``retryable`` flag is set are retried.
    """

    max_attempts: int = 3
    delay_base: float = 2.0
    max_delay: float = 30.0
    attempt_logger: AttemptLogger | None = None

    def delays(self) -> Iterable[float]:
        for attempt in range(self.max_attempts - 1):
            yield min(self.delay_base**attempt, self.max_delay)


SINGLE_ATTEMPT = RetryConfig(max_attempts=1)


def call_with_retry(func: Callable[[], T], config: RetryConfig = SINGLE_ATTEMPT) -> T:
    """Invoke ``func`` under ``config``, re-raising the last ``ProviderError``."""
    delays = list(config.delays()) + [None]  # final attempt has no delay
    for attempt, delay in enumerate(delays):
        try:
            result = func()
        except ProviderError as e:
            if config.attempt_logger:
                config.attempt_logger(
                    attempt=attempt,
                    max_attempts=config.max_attempts,
                    delay=delay if e.retryable else None,
                    error=e,
                )
            if e.retryable and delay is not None:
                time.sleep(delay)
                continue
            raise
        if config.attempt_logger:
            config.attempt_logger(
                attempt=attempt,
                max_attempts=config.max_attempts,
                delay=None,
                error=None,
            )
        return result
    raise RuntimeError("retry: no attempts configured")  # pragma: no cover - max_attempts < 1


def retry(config: RetryConfig = SINGLE_ATTEMPT):
    """Decorator form of :func:`call_with_retry`."""

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            return call_with_retry(lambda: func(*args, **kwargs), config)

        return wrapper

    return decorator


__all__ = [
    "RetryConfig",
    "SINGLE_ATTEMPT",
    "call_with_retry",
    "retry",
]
