"""AnthropicProvider adapter.

This module implements the Anthropic provider integration using the
``anthropic`` SDK Messages API (``client.messages.create``) for both blocking
and streaming requests (``stream=True``).

Key behaviors:
* System messages are hoisted into the ``system`` parameter.
* ``max_tokens`` is always sent (required by the API); when the request leaves
  it unset the model's catalog limit is used.
* Streaming yields text deltas, then one usage-only chunk assembled from the
  ``message_start``/``message_delta`` events.
* SDK retries are disabled; the chat invoker owns retry policy.
"""

from __future__ import annotations

from typing import Iterator, Optional, Sequence

import anthropic
import httpx

from ..base.catalog import ModelCatalog, default_catalog
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ChatMessage, ChatRequestOptions, ChatResponse, ChatResponseChunk
from ..base.repositories.credentials import Credential
from ..base.timeouts import get_timeout_config
from ..config import get_provider_config
from .helpers import StreamUsageTracker, build_params, extract_text, extract_usage, text_delta


class AnthropicProvider:
    """Adapter for the Anthropic Messages API supporting chat and streaming."""

    def __init__(
        self,
        credential: Credential,
        *,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        catalog: Optional[ModelCatalog] = None,
    ) -> None:
        self._credential = credential
        self._catalog = catalog or default_catalog()
        self._logger = get_logger("providers.anthropic")
        self._client = anthropic.Anthropic(
            api_key=credential.secret,
            base_url=base_url or get_provider_config("anthropic")["base_url"],
            http_client=http_client,
            max_retries=0,
            timeout=get_timeout_config().to_httpx(),
        )

    @property
    def provider_name(self) -> str:
        """Returns the name of the provider ('anthropic')."""
        return "anthropic"

    def chat(self, messages: Sequence[ChatMessage], options: ChatRequestOptions) -> ChatResponse:
        log_event(self._logger, "sdk.request", LogContext(provider="anthropic", model=options.model), stream=False)
        resp = self._client.messages.create(**self._params(messages, options))
        return ChatResponse(content=extract_text(resp), usage=extract_usage(resp))

    def stream_chat(
        self, messages: Sequence[ChatMessage], options: ChatRequestOptions
    ) -> Iterator[ChatResponseChunk]:
        log_event(self._logger, "sdk.request", LogContext(provider="anthropic", model=options.model), stream=True)
        stream = self._client.messages.create(**self._params(messages, options), stream=True)
        tracker = StreamUsageTracker()
        with stream:
            for event in stream:
                tracker.observe(event)
                text = text_delta(event)
                if text:
                    yield ChatResponseChunk(content=text)
        usage = tracker.usage()
        if usage is not None:
            yield ChatResponseChunk(content="", usage=usage)

    def _params(self, messages: Sequence[ChatMessage], options: ChatRequestOptions):
        limit = self._catalog.resolve("anthropic", options.model).max_output_tokens
        return build_params(messages, options, default_max_tokens=limit)

    def close(self) -> None:
        self._client.close()


__all__ = ["AnthropicProvider"]
