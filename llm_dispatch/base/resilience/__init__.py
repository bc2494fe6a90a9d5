"""Resilience helpers (caller-opt-in retry)."""

from .retry import SINGLE_ATTEMPT, RetryConfig, call_with_retry, retry

__all__ = ["RetryConfig", "SINGLE_ATTEMPT", "call_with_retry", "retry"]
