"""Streaming package: consumer-side stream handle and chunk helpers."""

from .streaming import accumulate_chunks, split_text
from .stream_controller import ChatStream

__all__ = ["ChatStream", "accumulate_chunks", "split_text"]
