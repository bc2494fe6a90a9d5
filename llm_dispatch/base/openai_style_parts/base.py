"""BaseOpenAIStyleProvider: shared adapter for OpenAI-compatible HTTP APIs.

Purpose:
- Implement :class:`ChatProvider` once for every vendor that speaks the
  OpenAI Chat Completions wire format over HTTPS (Cerebras, Groq, DeepSeek,
  OpenRouter, xAI, Gemini's compatibility endpoint).

External dependencies:
- ``httpx`` for transport (one client per provider instance).

Failure semantics:
- Non-2xx responses raise ``httpx.HTTPStatusError``; connection failures raise
  ``httpx.TransportError``. Nothing is classified here: the chat invoker
  normalizes whatever propagates.

Streaming:
- ``stream_chat`` is a generator running inside ``client.stream(...)``.
  Closing the generator early exits the ``with`` block, which closes the
  HTTP response immediately.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, Sequence

import httpx

from ..http import build_http_client, iter_sse_data
from ..logging import LogContext, get_logger, log_event
from ..models import ChatMessage, ChatRequestOptions, ChatResponse, ChatResponseChunk
from .provider_init import _ProviderInit
from .style_helpers import (
    CHAT_COMPLETIONS_PATH,
    build_chat_body,
    extract_openai_text,
    extract_openai_usage,
    parse_stream_chunk,
)


class BaseOpenAIStyleProvider:
    """Reusable base class for OpenAI-compatible providers.

    Subclasses implement ``provider_name`` and pass a :class:`_ProviderInit`
    carrying their base URL and any vendor headers.
    """

    def __init__(self, init: _ProviderInit) -> None:
        self._credential = init.credential
        self._base_url = init.base_url
        self._logger = get_logger(init.logger_name)
        headers: Dict[str, str] = {
            "Authorization": f"Bearer {init.credential.secret}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        headers.update(init.extra_headers)
        self._client: httpx.Client = build_http_client(
            init.base_url, headers=headers, transport=init.transport
        )

    # ----- Abstract surface -----
    @property
    def provider_name(self) -> str:  # pragma: no cover - abstract
        """Return the registry id of the provider (e.g., ``cerebras``)."""
        raise NotImplementedError

    @property
    def base_url(self) -> str:
        return self._base_url

    # ----- Chat -----
    def chat(self, messages: Sequence[ChatMessage], options: ChatRequestOptions) -> ChatResponse:
        """Perform a blocking chat completion."""
        body = build_chat_body(messages, options, stream=False)
        ctx = LogContext(provider=self.provider_name, model=options.model)
        log_event(self._logger, "http.request", ctx, level=logging.DEBUG, path=CHAT_COMPLETIONS_PATH, stream=False)
        response = self._client.post(CHAT_COMPLETIONS_PATH, json=body)
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError("Unexpected response body")
        return ChatResponse(content=extract_openai_text(payload), usage=extract_openai_usage(payload))

    # ----- Streaming -----
    def stream_chat(
        self, messages: Sequence[ChatMessage], options: ChatRequestOptions
    ) -> Iterator[ChatResponseChunk]:
        """Stream a chat completion as :class:`ChatResponseChunk` objects.

        The request is sent on the first ``next()``; chunks carrying neither
        text nor usage are skipped.
        """
        body = build_chat_body(messages, options, stream=True)
        ctx = LogContext(provider=self.provider_name, model=options.model)
        log_event(self._logger, "http.request", ctx, level=logging.DEBUG, path=CHAT_COMPLETIONS_PATH, stream=True)
        with self._client.stream("POST", CHAT_COMPLETIONS_PATH, json=body) as response:
            if response.is_error:
                # Error bodies must be read before the response can raise.
                response.read()
                response.raise_for_status()
            for data in iter_sse_data(response):
                chunk = parse_stream_chunk(data)
                if chunk is not None:
                    yield chunk

    # ----- lifecycle -----
    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self._base_url!r}, credential={self._credential.masked()})"


__all__ = ["BaseOpenAIStyleProvider"]
