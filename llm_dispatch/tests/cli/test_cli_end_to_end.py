"""End-to-end CLI runs against an in-process HTTP fake.

The full stack is real (parser, binder, credential store, registry, invoker,
adapter, ``httpx`` client); only the network is replaced by
``httpx.MockTransport``.
"""

from __future__ import annotations

import io
import json

import httpx
import pytest

from llm_dispatch.cli import main
from llm_dispatch.di import build_container


def _completion(request: httpx.Request) -> httpx.Response:
    body = json.loads(request.content)
    if body.get("stream"):
        text = (
            'data: {"choices":[{"delta":{"content":"Hello"}}]}\n\n'
            'data: {"choices":[{"delta":{"content":", world"}}]}\n\n'
            'data: {"choices":[],"usage":{"prompt_tokens":4,"completion_tokens":3}}\n\n'
            "data: [DONE]\n\n"
        )
        return httpx.Response(200, headers={"content-type": "text/event-stream"}, text=text)
    return httpx.Response(
        200,
        json={
            "choices": [{"index": 0, "message": {"role": "assistant", "content": "Hello, world"}}],
            "usage": {"prompt_tokens": 4, "completion_tokens": 3},
        },
    )


@pytest.fixture()
def cli(recording_transport):
    transport, handler = recording_transport(_completion)
    container = build_container(transport=transport)

    def run(*argv, secret="sk-test"):
        out, err = io.StringIO(), io.StringIO()
        code = main(
            list(argv),
            container=container,
            stdout=out,
            stderr=err,
            getpass_fn=lambda prompt: secret,
        )
        return code, out.getvalue(), err.getvalue()

    run.handler = handler
    run.container = container
    return run


def test_configure_then_chat(cli, credentials_path):
    code, out, _ = cli("configure", "--provider", "cerebras")
    assert code == 0
    assert "Saved key for Cerebras" in out
    assert json.loads(credentials_path.read_text()) == {"cerebras": "sk-test"}

    code, out, err = cli("cerebras", "--model", "llama3.1-8b", "--prompt", "hello")

    assert code == 0
    assert out.strip() == "Hello, world"
    assert err == ""
    request = cli.handler.requests[0]
    assert request.headers["authorization"] == "Bearer sk-test"
    body = cli.handler.json_body()
    assert body["messages"] == [{"role": "user", "content": "hello"}]
    assert body["model"] == "llama3.1-8b"
    # Unset output cap is omitted so the server default applies.
    assert "max_tokens" not in body


def test_missing_credential_fails_before_any_request(cli):
    code, out, err = cli("cerebras", "--model", "llama3.1-8b", "--prompt", "hello")

    assert code == 1
    assert out == ""
    assert err.startswith("Configuration required")
    assert "CEREBRAS_API_KEY" in err
    assert cli.handler.calls == 0


def test_env_credential_overrides_file(cli, monkeypatch):
    cli.container.store.save({"groq": "sk-file"})
    monkeypatch.setenv("GROQ_API_KEY", "sk-env")

    code, _, _ = cli("groq", "--prompt", "hi")

    assert code == 0
    assert cli.handler.requests[0].headers["authorization"] == "Bearer sk-env"


def test_streamed_chat_prints_incrementally_with_usage(cli, monkeypatch):
    monkeypatch.setenv("XAI_API_KEY", "sk-x")

    code, out, err = cli("xai", "--prompt", "hi", "--stream", "--usage")

    assert code == 0
    assert out == "Hello, world\n"
    assert "Usage: input=4 output=3 total=7" in err
    assert cli.handler.json_body()["stream"] is True


def test_unknown_model_fails_before_any_request(cli, monkeypatch):
    monkeypatch.setenv("CEREBRAS_API_KEY", "sk-test")

    code, _, err = cli("cerebras", "--model", "gpt-9", "--prompt", "hello")

    assert code == 1
    assert err.startswith("Error (model_not_found):")
    assert cli.handler.calls == 0


def test_rejected_key_reports_authentication(monkeypatch, recording_transport):
    transport, handler = recording_transport(lambda request: httpx.Response(401, json={"error": "nope"}))
    monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-bad")
    out, err = io.StringIO(), io.StringIO()

    code = main(
        ["deepseek", "--prompt", "hello"],
        container=build_container(transport=transport),
        stdout=out,
        stderr=err,
    )

    assert code == 1
    assert err.getvalue().startswith("Error (authentication):")
    assert "sk-bad" not in err.getvalue()
    assert handler.calls == 1


def test_explicit_max_tokens_is_forwarded(cli, monkeypatch):
    monkeypatch.setenv("CEREBRAS_API_KEY", "sk-test")

    code, _, _ = cli("cerebras", "--model", "llama3.1-8b", "--prompt", "hello", "--max-tokens", "256")

    assert code == 0
    assert cli.handler.json_body()["max_tokens"] == 256


@pytest.mark.parametrize("bad_url", ["http://[::1", "ftp://proxy.example.test", "not a url"])
def test_invalid_base_url_reports_configuration_error(cli, monkeypatch, bad_url):
    monkeypatch.setenv("CEREBRAS_API_KEY", "sk-test")
    monkeypatch.setenv("CEREBRAS_BASE_URL", bad_url)

    code, out, err = cli("cerebras", "--prompt", "hi")

    assert code == 1
    assert out == ""
    assert err.startswith("Error (configuration): Invalid base URL for 'cerebras'")
    assert cli.handler.calls == 0
