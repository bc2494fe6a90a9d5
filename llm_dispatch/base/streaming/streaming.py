"""Streaming helpers independent of any provider."""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..models import ChatResponse, ChatResponseChunk, Usage


def accumulate_chunks(chunks: Iterable[ChatResponseChunk]) -> ChatResponse:
    """Fold a chunk sequence into the equivalent blocking :class:`ChatResponse`.

    Contents are concatenated in order; the last reported ``usage`` wins.
    """
    parts: List[str] = []
    usage: Optional[Usage] = None
    for chunk in chunks:
        if chunk.content:
            parts.append(chunk.content)
        if chunk.usage is not None:
            usage = chunk.usage
    return ChatResponse(content="".join(parts), usage=usage)


def split_text(text: str, chunk_size: int = 16) -> List[str]:
    """Split text into fixed-size pieces for deterministic streaming."""
    if not text:
        return []
    return [text[i : i + chunk_size] for i in range(0, len(text), chunk_size)]


__all__ = ["accumulate_chunks", "split_text"]
