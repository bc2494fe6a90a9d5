"""Chat Invoker.

Drives one request through a provider instance. This is the normalization
boundary: every exception raised by a provider (while calling ``chat``,
while creating a stream, or while pulling a chunk) leaves this module as a
:class:`ProviderError`.

Before calling the provider the invoker resolves the model's catalog entry and
applies its defaults, so no provider is ever reached with an uncataloged model
or a ``max_output_tokens`` above the model's limit.

Retries are opt-in: pass a :class:`RetryConfig` to retry ``rate_limit`` and
``transient`` failures of blocking calls. Streams are never retried.
"""
from __future__ import annotations

import logging
import time
from typing import List, Optional, Sequence

from .cancellation import CancellationToken
from .catalog import ModelCatalog
from .errors import ProviderError, normalize_exception
from .interfaces import ChatProvider
from .logging import LogContext, get_logger, normalized_log_event
from .models import ChatMessage, ChatRequestOptions, ChatResponse
from .resilience.retry import SINGLE_ATTEMPT, RetryConfig, call_with_retry
from .streaming import ChatStream


class ChatInvoker:
    """Uniform blocking/streaming invocation over any :class:`ChatProvider`.

    Parameters
    ----------
    catalog:
        Catalog used to resolve the request's model before any network call.
    retry_config:
        Caller-supplied retry policy for blocking calls. Defaults to a single
        attempt.
    logger:
        Optional logger; defaults to ``llm_dispatch.invoker``.
    """

    def __init__(
        self,
        catalog: ModelCatalog,
        *,
        retry_config: RetryConfig = SINGLE_ATTEMPT,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._catalog = catalog
        self._retry_config = retry_config
        self._logger = logger or get_logger("llm_dispatch.invoker")

    # ---- blocking ------------------------------------------------------
    def chat(
        self,
        provider: ChatProvider,
        messages: Sequence[ChatMessage],
        options: ChatRequestOptions,
    ) -> ChatResponse:
        """Run a blocking request and return the complete response.

        Raises
        ------
        ProviderError
            ``model_not_found``/``configuration`` before the provider is
            called, or the normalized provider failure.
        """
        name = provider.provider_name
        options, msgs = self._prepare(name, messages, options)
        ctx = LogContext(provider=name, model=options.model)
        normalized_log_event(
            self._logger,
            "chat.start",
            ctx,
            phase="start",
            temperature=options.temperature,
            max_output_tokens=options.max_output_tokens,
            messages=len(msgs),
        )

        def _once() -> ChatResponse:
            try:
                return provider.chat(msgs, options)
            except Exception as exc:
                raise normalize_exception(exc, provider=name, model=options.model) from exc

        def _attempt_logger(*, attempt: int, max_attempts: int, delay, error: ProviderError | None) -> None:
            if error is None:
                return
            normalized_log_event(
                self._logger,
                "chat.retry",
                ctx,
                phase="retry",
                attempt=attempt,
                error_kind=error.kind.value,
                max_attempts=max_attempts,
                delay=delay,
                will_retry=delay is not None,
            )

        cfg = RetryConfig(
            max_attempts=self._retry_config.max_attempts,
            delay_base=self._retry_config.delay_base,
            max_delay=self._retry_config.max_delay,
            attempt_logger=self._retry_config.attempt_logger or _attempt_logger,
        )
        t0 = time.perf_counter()
        try:
            response = call_with_retry(_once, cfg)
        except ProviderError as err:
            normalized_log_event(
                self._logger,
                "chat.error",
                ctx,
                phase="finalize",
                error_kind=err.kind.value,
                emitted=False,
                level=logging.WARNING,
                retryable=err.retryable,
                status_code=err.status_code,
            )
            raise
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            emitted=bool(response.content),
            tokens=response.usage.to_dict() if response.usage else None,
            latency_ms=int((time.perf_counter() - t0) * 1000),
        )
        return response

    # ---- streaming -----------------------------------------------------
    def stream_chat(
        self,
        provider: ChatProvider,
        messages: Sequence[ChatMessage],
        options: ChatRequestOptions,
        *,
        token: CancellationToken | None = None,
    ) -> ChatStream:
        """Start a streamed request and return its :class:`ChatStream`.

        The stream must be consumed or closed by the caller; using it as a
        context manager guarantees the transport is released.

        Raises
        ------
        CancelledError
            If ``token`` is already cancelled; the provider is not called.
        ProviderError
            Precondition failures, or a normalized failure to open the stream.
        """
        name = provider.provider_name
        options, msgs = self._prepare(name, messages, options)
        if token is not None:
            token.raise_if_cancelled()
        ctx = LogContext(provider=name, model=options.model)
        normalized_log_event(
            self._logger,
            "stream.start",
            ctx,
            phase="start",
            temperature=options.temperature,
            max_output_tokens=options.max_output_tokens,
            messages=len(msgs),
        )
        try:
            source = iter(provider.stream_chat(msgs, options))
        except Exception as exc:
            err = normalize_exception(exc, provider=name, model=options.model)
            normalized_log_event(
                self._logger,
                "stream.error",
                ctx,
                phase="start",
                error_kind=err.kind.value,
                emitted=False,
                level=logging.WARNING,
            )
            raise err from exc
        return ChatStream(source, ctx=ctx, logger=self._logger, token=token)

    # ---- helpers -------------------------------------------------------
    def _prepare(
        self,
        provider_name: str,
        messages: Sequence[ChatMessage],
        options: ChatRequestOptions,
    ) -> tuple[ChatRequestOptions, List[ChatMessage]]:
        msgs = list(messages)
        if not msgs:
            raise ValueError("At least one message is required")
        entry = self._catalog.resolve(provider_name, options.model)
        return options.with_catalog_defaults(entry), msgs


__all__ = ["ChatInvoker"]
