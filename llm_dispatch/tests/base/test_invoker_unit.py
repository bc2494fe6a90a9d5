"""Chat invoker: catalog gating, normalization boundary and retries."""
from __future__ import annotations

import time
from typing import Iterator, List

import httpx
import pytest

from llm_dispatch.base.catalog import default_catalog
from llm_dispatch.base.errors import ErrorKind, ModelNotFoundError, ProviderError
from llm_dispatch.base.invoker import ChatInvoker
from llm_dispatch.base.models import ChatMessage, ChatRequestOptions, ChatResponse, ChatResponseChunk
from llm_dispatch.base.resilience.retry import RetryConfig


def _status_error(status: int) -> httpx.HTTPStatusError:
    request = httpx.Request("POST", "https://example.test/chat")
    return httpx.HTTPStatusError("boom", request=request, response=httpx.Response(status, request=request))


class ScriptedProvider:
    """Provider whose ``chat`` replays a script of results and exceptions."""

    def __init__(self, script: List[object], name: str = "cerebras") -> None:
        self._script = list(script)
        self._name = name
        self.seen_options: List[ChatRequestOptions] = []

    @property
    def provider_name(self) -> str:
        return self._name

    def chat(self, messages, options) -> ChatResponse:
        self.seen_options.append(options)
        item = self._script.pop(0)
        if isinstance(item, BaseException):
            raise item
        return ChatResponse(content=str(item))

    def stream_chat(self, messages, options) -> Iterator[ChatResponseChunk]:
        self.seen_options.append(options)
        raise _status_error(401)


MESSAGES = [ChatMessage.user("hello")]


def test_chat_applies_catalog_defaults_before_calling_provider():
    provider = ScriptedProvider(["hi"])
    resp = ChatInvoker(default_catalog()).chat(provider, MESSAGES, ChatRequestOptions())
    assert resp.content == "hi"
    (opts,) = provider.seen_options
    assert opts.model == "llama3.1-8b"
    assert opts.max_output_tokens is None


def test_unknown_model_never_reaches_provider():
    provider = ScriptedProvider(["hi"])
    with pytest.raises(ModelNotFoundError):
        ChatInvoker(default_catalog()).chat(provider, MESSAGES, ChatRequestOptions(model="bogus-model"))
    assert provider.seen_options == []


def test_empty_message_list_rejected():
    with pytest.raises(ValueError):
        ChatInvoker(default_catalog()).chat(ScriptedProvider(["x"]), [], ChatRequestOptions())


def test_transport_errors_are_normalized_once():
    provider = ScriptedProvider([_status_error(429)])
    with pytest.raises(ProviderError) as ei:
        ChatInvoker(default_catalog()).chat(provider, MESSAGES, ChatRequestOptions())
    assert ei.value.kind is ErrorKind.RATE_LIMIT
    assert ei.value.provider == "cerebras"
    assert ei.value.model == "llama3.1-8b"
    assert isinstance(ei.value.__cause__, httpx.HTTPStatusError)


def test_default_is_single_attempt():
    provider = ScriptedProvider([_status_error(503), "late"])
    with pytest.raises(ProviderError):
        ChatInvoker(default_catalog()).chat(provider, MESSAGES, ChatRequestOptions())
    assert len(provider.seen_options) == 1


def test_caller_supplied_retry_config_retries_retryable(monkeypatch):
    monkeypatch.setattr(time, "sleep", lambda *_: None)
    provider = ScriptedProvider([_status_error(503), _status_error(429), "third time"])
    invoker = ChatInvoker(default_catalog(), retry_config=RetryConfig(max_attempts=3))
    assert invoker.chat(provider, MESSAGES, ChatRequestOptions()).content == "third time"
    assert len(provider.seen_options) == 3


def test_retry_config_does_not_retry_authentication(monkeypatch):
    monkeypatch.setattr(time, "sleep", lambda *_: None)
    provider = ScriptedProvider([_status_error(401), "never"])
    invoker = ChatInvoker(default_catalog(), retry_config=RetryConfig(max_attempts=3))
    with pytest.raises(ProviderError) as ei:
        invoker.chat(provider, MESSAGES, ChatRequestOptions())
    assert ei.value.kind is ErrorKind.AUTHENTICATION
    assert len(provider.seen_options) == 1


def test_stream_start_failure_is_normalized():
    provider = ScriptedProvider([])
    with pytest.raises(ProviderError) as ei:
        ChatInvoker(default_catalog()).stream_chat(provider, MESSAGES, ChatRequestOptions())
    assert ei.value.kind is ErrorKind.AUTHENTICATION
