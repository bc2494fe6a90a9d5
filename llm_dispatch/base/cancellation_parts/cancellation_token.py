"""Cooperative cancellation token implementation.

A token is checked by :class:`llm_dispatch.base.streaming.ChatStream` before
each pull, so cancelling from another thread (or a signal handler) stops the
stream at the next chunk boundary and tears down its transport there, in the
consuming thread.
"""

from __future__ import annotations

from dataclasses import dataclass
from threading import Lock
from typing import Optional

from .cancelled_error import CancelledError


@dataclass
class _State:
    cancelled: bool = False
    reason: Optional[str] = None


class CancellationToken:
    """Thread-safe cooperative cancellation flag."""

    def __init__(self) -> None:
        self._state = _State()
        self._lock = Lock()

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation; subsequent calls keep the first reason."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if the token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self._state.cancelled}, reason={self._state.reason!r})"


__all__ = ["CancellationToken"]
