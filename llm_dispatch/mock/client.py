"""Deterministic offline provider.

Purpose
-------
Implement the :class:`ChatProvider` contract without any network traffic so
the CLI, invoker and streaming layers can be exercised end to end. The reply
echoes the last user message, optionally overridden per prompt through a
``responses`` mapping.

Streaming semantics
-------------------
``stream_chat`` splits the blocking reply into fixed-size pieces, so the
concatenated chunks always equal the blocking content. The final chunk carries
usage. ``chat_calls``, ``stream_calls`` and ``closed_streams`` count activity
for tests.
"""

from __future__ import annotations

from typing import Iterator, Mapping, Optional, Sequence

from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ChatMessage, ChatRequestOptions, ChatResponse, ChatResponseChunk, Usage
from ..base.repositories.credentials import Credential
from ..base.streaming import split_text

ECHO_PREFIX = "echo: "


def _count_tokens(text: str) -> int:
    return len(text.split())


class MockProvider:
    """Adapter that echoes the conversation instead of calling a live API."""

    def __init__(
        self,
        credential: Credential,
        *,
        responses: Optional[Mapping[str, str]] = None,
        chunk_size: int = 8,
    ) -> None:
        """Initialize the mock provider.

        Parameters
        ----------
        credential: Credential
            Accepted for contract parity; its secret is never inspected.
        responses: Optional[Mapping[str, str]]
            Canned replies keyed by the last user message.
        chunk_size: int, default ``8``
            Characters per streamed chunk.
        """
        self._credential = credential
        self._responses = dict(responses or {})
        self._chunk_size = max(1, chunk_size)
        self._logger = get_logger("providers.mock")
        self.chat_calls = 0
        self.stream_calls = 0
        self.closed_streams = 0

    @property
    def provider_name(self) -> str:
        return "mock"

    def _reply(self, messages: Sequence[ChatMessage]) -> tuple[str, Usage]:
        prompt = next((m.content for m in reversed(messages) if m.role == "user"), "")
        text = self._responses.get(prompt, f"{ECHO_PREFIX}{prompt}")
        consumed = sum(_count_tokens(m.content) for m in messages)
        return text, Usage(input_tokens=consumed, output_tokens=_count_tokens(text))

    def chat(self, messages: Sequence[ChatMessage], options: ChatRequestOptions) -> ChatResponse:
        self.chat_calls += 1
        text, usage = self._reply(messages)
        log_event(self._logger, "mock.chat", LogContext(provider="mock", model=options.model))
        return ChatResponse(content=text, usage=usage)

    def stream_chat(
        self, messages: Sequence[ChatMessage], options: ChatRequestOptions
    ) -> Iterator[ChatResponseChunk]:
        self.stream_calls += 1
        text, usage = self._reply(messages)
        pieces = split_text(text, self._chunk_size)
        try:
            for idx, piece in enumerate(pieces):
                last = idx == len(pieces) - 1
                yield ChatResponseChunk(content=piece, usage=usage if last else None)
            if not pieces:
                yield ChatResponseChunk(content="", usage=usage)
        finally:
            self.closed_streams += 1


__all__ = ["MockProvider", "ECHO_PREFIX"]
