"""
ChatResponse and ChatResponseChunk DTOs representing normalized provider output.

A blocking call yields one :class:`ChatResponse`; a streaming call yields a
sequence of :class:`ChatResponseChunk` whose concatenated ``content`` equals
the blocking response content for the same input.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class Usage:
    """Token accounting reported by the provider."""

    input_tokens: int
    output_tokens: int

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def to_dict(self) -> Dict[str, int]:
        return {
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
        }


@dataclass(frozen=True)
class ChatResponse:
    """Provider-agnostic response from a blocking chat invocation.

    Attributes:
        content: Complete response text.
        usage: Optional token accounting when the provider reports it.
    """

    content: str
    usage: Optional[Usage] = None


@dataclass(frozen=True)
class ChatResponseChunk:
    """Incremental piece of a streamed response.

    ``content`` may be empty for chunks that only carry ``usage`` (typically
    the last one).
    """

    content: str
    usage: Optional[Usage] = None


__all__ = ["ChatResponse", "ChatResponseChunk", "Usage"]
