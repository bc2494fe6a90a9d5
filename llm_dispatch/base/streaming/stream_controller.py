"""ChatStream: the consumer-side handle for a streamed chat response.

Wraps the chunk iterator returned by a provider's ``stream_chat`` and gives
the caller a single place to stop consuming. Responsibilities:

* normalize any failure raised while pulling a chunk (the provider boundary),
* close the provider iterator exactly once, whether the stream finished,
  failed, was cancelled, or the caller left a ``with`` block early,
* never deliver a chunk after cancellation,
* honour an optional :class:`CancellationToken` checked before each pull.
"""
from __future__ import annotations

import logging
from typing import Iterator, List, Optional

from ..cancellation import CancellationToken
from ..errors import normalize_exception
from ..logging import LogContext, normalized_log_event
from ..models import ChatResponse, ChatResponseChunk, Usage
from .streaming import accumulate_chunks


class ChatStream:
    """Cancellable, single-consumer iterator of :class:`ChatResponseChunk`."""

    def __init__(
        self,
        source: Iterator[ChatResponseChunk],
        *,
        ctx: LogContext,
        logger: logging.Logger,
        token: CancellationToken | None = None,
    ) -> None:
        self._source = source
        self._ctx = ctx
        self._logger = logger
        self._token = token
        self._closed = False
        self._cancelled = False
        self._finished = False
        self._emitted = 0
        self._usage: Optional[Usage] = None

    # iteration -----------------------------------------------------------
    def __iter__(self) -> "ChatStream":
        return self

    def __next__(self) -> ChatResponseChunk:
        if self._closed:
            raise StopIteration
        if self._token is not None and self._token.cancelled:
            self.cancel(self._token.reason)
            raise StopIteration
        try:
            chunk = next(self._source)
        except StopIteration:
            self._finished = True
            self._release()
            normalized_log_event(
                self._logger,
                "stream.end",
                self._ctx,
                phase="finalize",
                emitted=self._emitted > 0,
                tokens=self._usage.to_dict() if self._usage else None,
                chunks=self._emitted,
            )
            raise
        except Exception as exc:
            err = normalize_exception(exc, provider=self._ctx.provider or "unknown", model=self._ctx.model)
            self._release()
            normalized_log_event(
                self._logger,
                "stream.error",
                self._ctx,
                phase="midstream" if self._emitted else "start",
                error_kind=err.kind.value,
                emitted=self._emitted > 0,
                level=logging.WARNING,
                retryable=err.retryable,
                status_code=err.status_code,
            )
            raise err from exc
        self._emitted += 1
        if chunk.usage is not None:
            self._usage = chunk.usage
        return chunk

    # lifecycle -----------------------------------------------------------
    def cancel(self, reason: str | None = None) -> None:
        """Stop the stream and release its transport.

        Safe to call repeatedly or after completion; only the first call on an
        unfinished stream has an effect.
        """
        if self._closed:
            return
        self._cancelled = True
        self._release()
        normalized_log_event(
            self._logger,
            "stream.cancelled",
            self._ctx,
            phase="cancelled",
            emitted=self._emitted > 0,
            reason=reason,
            chunks=self._emitted,
        )

    def close(self) -> None:
        """Alias of :meth:`cancel` for ``contextlib.closing`` style callers."""
        self.cancel("closed")

    def _release(self) -> None:
        if self._closed:
            return
        self._closed = True
        close = getattr(self._source, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "ChatStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cancel("exited" if exc_type is None else exc_type.__name__)

    # accessors -----------------------------------------------------------
    def collect(self) -> ChatResponse:
        """Consume the remaining chunks and return the accumulated response.

        Only chunks pulled by this call are included; callers mixing manual
        iteration with ``collect`` must combine the results themselves.
        """
        chunks: List[ChatResponseChunk] = list(self)
        return accumulate_chunks(chunks)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def finished(self) -> bool:
        """Whether the provider iterator was exhausted normally."""
        return self._finished

    @property
    def emitted(self) -> int:
        """Number of chunks delivered to the consumer."""
        return self._emitted

    @property
    def usage(self) -> Optional[Usage]:
        """Last usage report seen on the stream, if any."""
        return self._usage


__all__ = ["ChatStream"]
