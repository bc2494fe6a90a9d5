"""ChatProvider Protocol (single-class module).

Defines the capability contract every vendor adapter implements.
"""

from __future__ import annotations

from typing import Iterator, Protocol, Sequence, runtime_checkable

from ..models import ChatMessage, ChatRequestOptions, ChatResponse, ChatResponseChunk


@runtime_checkable
class ChatProvider(Protocol):
    """Blocking and streaming chat capability shared by all providers.

    Implementations translate :class:`ChatMessage` and
    :class:`ChatRequestOptions` to their wire format and never leak SDK or
    JSON objects upstream. Both methods receive options that already carry
    catalog defaults (``model`` set, ``max_output_tokens`` within the model's
    limit or ``None``).

    Failure handling: raise. Transport errors propagate unchanged and are
    normalized by the chat invoker; adapters do not classify them.
    """

    @property
    def provider_name(self) -> str:
        """Registry id of the provider, e.g. ``"cerebras"``."""
        ...

    def chat(
        self, messages: Sequence[ChatMessage], options: ChatRequestOptions
    ) -> ChatResponse:
        """Execute a single request and return the complete response."""
        ...

    def stream_chat(
        self, messages: Sequence[ChatMessage], options: ChatRequestOptions
    ) -> Iterator[ChatResponseChunk]:
        """Return a lazy, finite, non-restartable chunk iterator.

        Closing the iterator before exhaustion must release the underlying
        transport immediately.
        """
        ...
