"""
Helper utilities for OpenAI-compatible Chat Completions adapters.

Purpose:
- Translate :class:`ChatMessage`/:class:`ChatRequestOptions` into the JSON
  request body shared by OpenAI-compatible vendors.
- Extract text and token usage from blocking responses and stream chunks.

External dependencies:
- None beyond the package DTOs; functions only prepare inputs or interpret
  outputs and perform no network I/O.

Fallback semantics:
- Missing ``choices``/``usage`` fields yield empty text or ``None`` usage
  rather than raising; malformed JSON is left to the caller (``json`` raises
  ``ValueError`` which normalizes to ``provider_other``).
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..models import ChatMessage, ChatRequestOptions, ChatResponseChunk, Usage

CHAT_COMPLETIONS_PATH = "/chat/completions"


def build_chat_body(
    messages: Sequence[ChatMessage],
    options: ChatRequestOptions,
    *,
    stream: bool,
) -> Dict[str, Any]:
    """Build the ``/chat/completions`` request body.

    Parameters:
        messages: Ordered conversation.
        options: Options with catalog defaults already applied.
        stream: Whether to request an SSE stream. Streaming requests ask for a
            trailing usage chunk via ``stream_options``.

    Returns:
        JSON-serializable request body.
    """
    body: Dict[str, Any] = {
        "model": options.model,
        "messages": to_wire_messages(messages),
        "stream": stream,
    }
    if options.max_output_tokens is not None:
        body["max_tokens"] = options.max_output_tokens
    if options.temperature is not None:
        body["temperature"] = options.temperature
    if stream:
        body["stream_options"] = {"include_usage": True}
    return body


def extract_openai_usage(payload: Mapping[str, Any]) -> Optional[Usage]:
    """Return token usage from a response/chunk payload, if reported."""
    usage = payload.get("usage")
    if not isinstance(usage, Mapping):
        return None
    prompt = usage.get("prompt_tokens")
    completion = usage.get("completion_tokens")
    if not isinstance(prompt, int) or not isinstance(completion, int):
        return None
    return Usage(input_tokens=prompt, output_tokens=completion)


def _first_choice(payload: Mapping[str, Any]) -> Mapping[str, Any]:
    choices = payload.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], Mapping):
        return choices[0]
    return {}


def extract_openai_text(payload: Mapping[str, Any]) -> str:
    """Extract assistant text from a blocking Chat Completions payload.

    Returns an empty string when the expected fields are absent.
    """
    message = _first_choice(payload).get("message")
    if isinstance(message, Mapping):
        content = message.get("content")
        if isinstance(content, str):
            return content
    return ""


def parse_stream_chunk(data: str) -> Optional[ChatResponseChunk]:
    """Translate one SSE ``data:`` payload into a chunk.

    Returns ``None`` for payloads that carry neither text nor usage (role
    preambles, keep-alives, finish markers).
    """
    payload = json.loads(data)
    if not isinstance(payload, Mapping):
        return None
    delta = _first_choice(payload).get("delta")
    content = ""
    if isinstance(delta, Mapping) and isinstance(delta.get("content"), str):
        content = delta["content"]
    usage = extract_openai_usage(payload)
    if not content and usage is None:
        return None
    return ChatResponseChunk(content=content, usage=usage)


def to_wire_messages(messages: Sequence[ChatMessage]) -> List[Dict[str, str]]:
    return [m.to_dict() for m in messages]


__all__ = [
    "CHAT_COMPLETIONS_PATH",
    "build_chat_body",
    "extract_openai_text",
    "extract_openai_usage",
    "parse_stream_chunk",
    "to_wire_messages",
]
