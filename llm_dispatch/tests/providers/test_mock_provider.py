from __future__ import annotations

from llm_dispatch.base.catalog import default_catalog
from llm_dispatch.base.invoker import ChatInvoker
from llm_dispatch.base.models import ChatMessage, ChatRequestOptions
from llm_dispatch.base.repositories.credentials import Credential
from llm_dispatch.mock import ECHO_PREFIX, MockProvider


def _provider(**kwargs) -> MockProvider:
    return MockProvider(Credential("mock", "unused"), **kwargs)


def test_echoes_last_user_message():
    provider = _provider()
    resp = ChatInvoker(default_catalog()).chat(
        provider, [ChatMessage.user("first"), ChatMessage.user("second turn")], ChatRequestOptions()
    )
    assert resp.content == f"{ECHO_PREFIX}second turn"
    assert resp.usage is not None and resp.usage.output_tokens == 3
    assert provider.chat_calls == 1


def test_stream_matches_blocking_and_carries_usage_last():
    provider = _provider(responses={"q": "a canned answer that spans chunks"}, chunk_size=5)
    invoker = ChatInvoker(default_catalog())
    blocking = invoker.chat(provider, [ChatMessage.user("q")], ChatRequestOptions())

    chunks = list(invoker.stream_chat(provider, [ChatMessage.user("q")], ChatRequestOptions(stream=True)))

    assert "".join(c.content for c in chunks) == blocking.content
    assert all(c.usage is None for c in chunks[:-1])
    assert chunks[-1].usage == blocking.usage
    assert provider.closed_streams == 1


def test_cancelled_stream_finalizes_generator():
    provider = _provider(chunk_size=1)
    stream = ChatInvoker(default_catalog()).stream_chat(
        provider, [ChatMessage.user("long enough")], ChatRequestOptions(stream=True)
    )
    next(stream)
    stream.cancel()
    assert provider.closed_streams == 1
    assert list(stream) == []
