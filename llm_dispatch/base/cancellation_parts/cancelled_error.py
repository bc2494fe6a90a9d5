"""Cancellation error type.

Defines the public ``CancelledError`` used to signal cooperative cancellation
of a chat stream. Kept isolated to satisfy one-class-per-file policy.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation observes a cancellation request.

    Distinct from provider failures so callers can stop quietly instead of
    reporting an error.
    """


__all__ = ["CancelledError"]
