"""Anthropic request/response translation helpers.

Purpose:
- Keep Messages API specifics (system prompt placement, required
  ``max_tokens``, content block and stream event shapes) out of the adapter.

External dependencies:
- None directly; functions read attributes of ``anthropic`` SDK objects
  without importing the SDK.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..base.models import ChatMessage, ChatRequestOptions, Usage


def build_params(
    messages: Sequence[ChatMessage],
    options: ChatRequestOptions,
    *,
    default_max_tokens: int,
) -> Dict[str, Any]:
    """Build ``messages.create`` keyword arguments.

    System messages are joined (blank line separated) into the top-level
    ``system`` parameter; the Messages API does not accept a ``system`` role.
    ``max_tokens`` is mandatory for this API: the options' value when set,
    else ``default_max_tokens`` (the model's catalog limit).
    """
    system_parts = [m.content for m in messages if m.role == "system"]
    convo: List[Dict[str, str]] = [m.to_dict() for m in messages if m.role != "system"]
    params: Dict[str, Any] = {
        "model": options.model,
        "messages": convo,
        "max_tokens": options.max_output_tokens or default_max_tokens,
    }
    if system_parts:
        params["system"] = "\n\n".join(system_parts)
    if options.temperature is not None:
        # Anthropic accepts [0, 1].
        params["temperature"] = min(options.temperature, 1.0)
    return params


def extract_text(resp: Any) -> str:
    """Concatenate the text blocks of a Messages API response."""
    parts = [
        getattr(block, "text", "") or ""
        for block in (getattr(resp, "content", None) or [])
        if getattr(block, "type", None) == "text"
    ]
    return "".join(parts)


def extract_usage(resp: Any) -> Optional[Usage]:
    usage = getattr(resp, "usage", None)
    if usage is None:
        return None
    return Usage(
        input_tokens=int(getattr(usage, "input_tokens", 0) or 0),
        output_tokens=int(getattr(usage, "output_tokens", 0) or 0),
    )


class StreamUsageTracker:
    """Accumulates usage across ``message_start``/``message_delta`` events."""

    def __init__(self) -> None:
        self.input_tokens: Optional[int] = None
        self.output_tokens: Optional[int] = None

    def observe(self, event: Any) -> None:
        etype = getattr(event, "type", None)
        if etype == "message_start":
            usage = getattr(getattr(event, "message", None), "usage", None)
            if usage is not None:
                self.input_tokens = getattr(usage, "input_tokens", None)
                self.output_tokens = getattr(usage, "output_tokens", None)
        elif etype == "message_delta":
            usage = getattr(event, "usage", None)
            if usage is not None and getattr(usage, "output_tokens", None) is not None:
                self.output_tokens = usage.output_tokens

    def usage(self) -> Optional[Usage]:
        if self.input_tokens is None and self.output_tokens is None:
            return None
        return Usage(input_tokens=self.input_tokens or 0, output_tokens=self.output_tokens or 0)


def text_delta(event: Any) -> str:
    """Return the text carried by a ``content_block_delta`` event, else ``""``."""
    if getattr(event, "type", None) != "content_block_delta":
        return ""
    delta = getattr(event, "delta", None)
    if getattr(delta, "type", None) != "text_delta":
        return ""
    return getattr(delta, "text", "") or ""


__all__ = [
    "build_params",
    "extract_text",
    "extract_usage",
    "StreamUsageTracker",
    "text_delta",
]
