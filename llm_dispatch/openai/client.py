"""OpenAI provider adapter built on the official ``openai`` SDK.

Public surface: ``OpenAIProvider`` implements the ``ChatProvider`` contract
(``chat``/``stream_chat``) on top of ``client.chat.completions.create``.

External dependencies:
- ``openai`` SDK; an optional ``httpx.Client`` can be injected (tests pass
  one backed by ``httpx.MockTransport``).

Retry & timeout semantics:
- The SDK's own retries are disabled (``max_retries=0``); retrying is a
  caller decision made through the chat invoker.
- Timeouts come from :func:`get_timeout_config`.

Failure semantics:
- SDK exceptions (``APIStatusError``, ``APIConnectionError``) propagate and
  are normalized by the invoker using their ``status_code`` and cause chain.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, Optional, Sequence

import httpx
import openai

from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ChatMessage, ChatRequestOptions, ChatResponse, ChatResponseChunk, Usage
from ..base.repositories.credentials import Credential
from ..base.timeouts import get_timeout_config
from ..config import get_provider_config

__all__ = ["OpenAIProvider"]


def _usage_from(obj: Any) -> Optional[Usage]:
    usage = getattr(obj, "usage", None)
    if usage is None:
        return None
    prompt = getattr(usage, "prompt_tokens", None)
    completion = getattr(usage, "completion_tokens", None)
    if not isinstance(prompt, int) or not isinstance(completion, int):
        return None
    return Usage(input_tokens=prompt, output_tokens=completion)


def _build_params(messages: Sequence[ChatMessage], options: ChatRequestOptions) -> Dict[str, Any]:
    params: Dict[str, Any] = {
        "model": options.model,
        "messages": [m.to_dict() for m in messages],
    }
    if options.max_output_tokens is not None:
        params["max_completion_tokens"] = options.max_output_tokens
    if options.temperature is not None:
        params["temperature"] = options.temperature
    return params


class OpenAIProvider:
    """OpenAI adapter using the Chat Completions API."""

    def __init__(
        self,
        credential: Credential,
        *,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        """Create the SDK client bound to ``credential``.

        Args:
            credential: Credential whose secret is passed as ``api_key``.
            base_url: Override of the configured API root.
            http_client: Optional ``httpx.Client`` handed to the SDK.
        """
        self._credential = credential
        self._logger = get_logger("providers.openai")
        self._client = openai.OpenAI(
            api_key=credential.secret,
            base_url=base_url or get_provider_config("openai")["base_url"],
            http_client=http_client,
            max_retries=0,
            timeout=get_timeout_config().to_httpx(),
        )

    @property
    def provider_name(self) -> str:
        """Return the canonical provider name."""
        return "openai"

    def chat(self, messages: Sequence[ChatMessage], options: ChatRequestOptions) -> ChatResponse:
        log_event(self._logger, "sdk.request", LogContext(provider="openai", model=options.model), stream=False)
        resp = self._client.chat.completions.create(**_build_params(messages, options))
        content = ""
        if resp.choices:
            content = resp.choices[0].message.content or ""
        return ChatResponse(content=content, usage=_usage_from(resp))

    def stream_chat(
        self, messages: Sequence[ChatMessage], options: ChatRequestOptions
    ) -> Iterator[ChatResponseChunk]:
        """Yield text deltas, then a usage-only chunk when the API reports one.

        Leaving the generator early exits the SDK stream's ``with`` block,
        which closes the HTTP response.
        """
        log_event(self._logger, "sdk.request", LogContext(provider="openai", model=options.model), stream=True)
        stream = self._client.chat.completions.create(
            **_build_params(messages, options),
            stream=True,
            stream_options={"include_usage": True},
        )
        with stream:
            for chunk in stream:
                text = ""
                if chunk.choices:
                    text = chunk.choices[0].delta.content or ""
                usage = _usage_from(chunk)
                if text or usage is not None:
                    yield ChatResponseChunk(content=text, usage=usage)

    def close(self) -> None:
        self._client.close()
