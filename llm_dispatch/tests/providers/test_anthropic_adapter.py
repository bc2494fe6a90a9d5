"""Anthropic SDK adapter driven through an ``httpx.MockTransport``."""

from __future__ import annotations

import httpx
import pytest

from llm_dispatch.anthropic.helpers import build_params
from llm_dispatch.base.catalog import default_catalog
from llm_dispatch.base.errors import ErrorKind, ProviderError
from llm_dispatch.base.invoker import ChatInvoker
from llm_dispatch.base.models import ChatMessage, ChatRequestOptions, Usage
from llm_dispatch.base.repositories.credentials import Credential
from llm_dispatch.anthropic import AnthropicProvider

MODEL = "claude-sonnet-4-20250514"

MESSAGE = {
    "id": "msg_1",
    "type": "message",
    "role": "assistant",
    "model": MODEL,
    "content": [{"type": "text", "text": "Bonjour"}],
    "stop_reason": "end_turn",
    "stop_sequence": None,
    "usage": {"input_tokens": 7, "output_tokens": 2},
}

STREAM_EVENTS = [
    {
        "type": "message_start",
        "message": {
            "id": "msg_1",
            "type": "message",
            "role": "assistant",
            "model": MODEL,
            "content": [],
            "stop_reason": None,
            "stop_sequence": None,
            "usage": {"input_tokens": 7, "output_tokens": 1},
        },
    },
    {"type": "content_block_start", "index": 0, "content_block": {"type": "text", "text": ""}},
    {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": "Bon"}},
    {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": "jour"}},
    {"type": "content_block_stop", "index": 0},
    {
        "type": "message_delta",
        "delta": {"stop_reason": "end_turn", "stop_sequence": None},
        "usage": {"output_tokens": 2},
    },
    {"type": "message_stop"},
]


def _provider(transport: httpx.MockTransport) -> AnthropicProvider:
    return AnthropicProvider(Credential("anthropic", "sk-ant"), http_client=httpx.Client(transport=transport))


def test_blocking_chat_hoists_system_and_sends_max_tokens(recording_transport):
    transport, handler = recording_transport(lambda request: httpx.Response(200, json=MESSAGE))
    provider = _provider(transport)

    resp = ChatInvoker(default_catalog()).chat(
        provider,
        [ChatMessage.system("Answer in French"), ChatMessage.user("hello")],
        ChatRequestOptions(model=MODEL),
    )

    assert resp.content == "Bonjour"
    assert resp.usage == Usage(7, 2)
    request = handler.requests[0]
    assert request.url.path == "/v1/messages"
    assert request.headers["x-api-key"] == "sk-ant"
    body = handler.json_body()
    assert body["system"] == "Answer in French"
    assert body["messages"] == [{"role": "user", "content": "hello"}]
    assert body["max_tokens"] == 64000


def test_stream_yields_text_then_usage(recording_transport, named_sse):
    payload = b"".join(named_sse(STREAM_EVENTS))
    transport, handler = recording_transport(
        lambda request: httpx.Response(200, headers={"content-type": "text/event-stream"}, content=payload)
    )
    provider = _provider(transport)
    invoker = ChatInvoker(default_catalog())

    with invoker.stream_chat(
        provider, [ChatMessage.user("hello")], ChatRequestOptions(model=MODEL, stream=True)
    ) as stream:
        response = stream.collect()

    assert response.content == "Bonjour"
    assert response.usage == Usage(7, 2)
    assert handler.json_body()["stream"] is True


def test_overloaded_is_transient(recording_transport):
    transport, _ = recording_transport(
        lambda request: httpx.Response(529, json={"type": "error", "error": {"type": "overloaded_error", "message": "busy"}})
    )
    with pytest.raises(ProviderError) as ei:
        ChatInvoker(default_catalog()).chat(
            _provider(transport), [ChatMessage.user("hello")], ChatRequestOptions(model=MODEL)
        )
    assert ei.value.kind is ErrorKind.TRANSIENT
    assert ei.value.retryable


def test_build_params_joins_system_and_clamps_temperature():
    opts = ChatRequestOptions(model=MODEL, max_output_tokens=100, temperature=1.7)
    params = build_params(
        [ChatMessage.system("one"), ChatMessage.system("two"), ChatMessage.user("q")],
        opts,
        default_max_tokens=4096,
    )
    assert params["system"] == "one\n\ntwo"
    assert params["temperature"] == 1.0
    assert params["max_tokens"] == 100
    assert "system" not in build_params([ChatMessage.user("q")], opts, default_max_tokens=4096)


def test_build_params_falls_back_to_default_max_tokens():
    params = build_params([ChatMessage.user("q")], ChatRequestOptions(model=MODEL), default_max_tokens=4096)
    assert params["max_tokens"] == 4096
