"""OpenAI SDK adapter driven through an ``httpx.MockTransport``."""

from __future__ import annotations

import httpx
import pytest

from llm_dispatch.base.catalog import default_catalog
from llm_dispatch.base.errors import ErrorKind, ProviderError
from llm_dispatch.base.invoker import ChatInvoker
from llm_dispatch.base.models import ChatMessage, ChatRequestOptions, Usage
from llm_dispatch.base.repositories.credentials import Credential
from llm_dispatch.openai import OpenAIProvider

COMPLETION = {
    "id": "chatcmpl-1",
    "object": "chat.completion",
    "created": 1700000000,
    "model": "gpt-4o-mini",
    "choices": [
        {
            "index": 0,
            "message": {"role": "assistant", "content": "Hi there"},
            "finish_reason": "stop",
        }
    ],
    "usage": {"prompt_tokens": 3, "completion_tokens": 2, "total_tokens": 5},
}


def _chunk(delta, *, usage=None, choices=True):
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion.chunk",
        "created": 1700000000,
        "model": "gpt-4o-mini",
        "choices": [{"index": 0, "delta": delta, "finish_reason": None}] if choices else [],
        "usage": usage,
    }


def _provider(transport: httpx.MockTransport) -> OpenAIProvider:
    return OpenAIProvider(Credential("openai", "sk-openai"), http_client=httpx.Client(transport=transport))


def test_blocking_chat_uses_completion_tokens_param(recording_transport):
    transport, handler = recording_transport(lambda request: httpx.Response(200, json=COMPLETION))
    provider = _provider(transport)

    resp = ChatInvoker(default_catalog()).chat(provider, [ChatMessage.user("hello")], ChatRequestOptions())

    assert resp.content == "Hi there"
    assert resp.usage == Usage(3, 2)
    request = handler.requests[0]
    assert request.url.path.endswith("/chat/completions")
    assert request.headers["authorization"] == "Bearer sk-openai"
    body = handler.json_body()
    assert body["model"] == "gpt-4o-mini"
    assert "max_completion_tokens" not in body
    assert "temperature" not in body


def test_stream_yields_deltas_then_usage(recording_transport, sse):
    pieces = sse(
        [
            _chunk({"role": "assistant", "content": ""}),
            _chunk({"content": "Hi "}),
            _chunk({"content": "there"}),
            _chunk({}, usage={"prompt_tokens": 3, "completion_tokens": 2, "total_tokens": 5}, choices=False),
        ]
    )
    transport, handler = recording_transport(
        lambda request: httpx.Response(200, headers={"content-type": "text/event-stream"}, content=b"".join(pieces))
    )
    provider = _provider(transport)

    stream = ChatInvoker(default_catalog()).stream_chat(
        provider, [ChatMessage.user("hello")], ChatRequestOptions(stream=True)
    )
    chunks = list(stream)

    assert [c.content for c in chunks] == ["Hi ", "there", ""]
    assert stream.usage == Usage(3, 2)
    assert stream.finished
    body = handler.json_body()
    assert body["stream"] is True
    assert body["stream_options"] == {"include_usage": True}


def test_sdk_status_error_is_normalized_without_retry(recording_transport):
    transport, handler = recording_transport(
        lambda request: httpx.Response(401, json={"error": {"message": "bad key sk-openai", "type": "auth"}})
    )
    provider = _provider(transport)

    with pytest.raises(ProviderError) as ei:
        ChatInvoker(default_catalog()).chat(provider, [ChatMessage.user("hello")], ChatRequestOptions())

    assert ei.value.kind is ErrorKind.AUTHENTICATION
    assert "sk-openai" not in str(ei.value)
    assert handler.calls == 1


def test_sdk_connection_error_is_transient():
    def refuse(request):
        raise httpx.ConnectError("refused", request=request)

    provider = _provider(httpx.MockTransport(refuse))
    with pytest.raises(ProviderError) as ei:
        ChatInvoker(default_catalog()).chat(provider, [ChatMessage.user("hello")], ChatRequestOptions())
    assert ei.value.kind is ErrorKind.TRANSIENT
