"""Pytest configuration for the llm_dispatch test suite.

Every test runs with an isolated credential file under ``tmp_path`` and with
provider API keys and base URL overrides removed from the environment, so no
test can read a developer's real keys or reach a real endpoint.

Shared HTTP fakes are exposed as fixtures: ``httpx.MockTransport`` handlers
that record requests, and a byte stream that counts how often it is closed.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, List, Mapping

import httpx
import pytest

from llm_dispatch.base.repositories.credentials import CredentialStore
from llm_dispatch.config.defaults import CREDENTIALS_FILE_ENV, LOG_LEVEL_ENV


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point the credential file at ``tmp_path`` and clear provider env vars."""
    for name in list(os.environ):
        if name.endswith("_API_KEY") or name.endswith("_BASE_URL"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    path = tmp_path / "config" / "credentials.json"
    monkeypatch.setenv(CREDENTIALS_FILE_ENV, str(path))
    yield path


@pytest.fixture()
def credentials_path(isolated_env: Path) -> Path:
    return isolated_env


@pytest.fixture()
def store(credentials_path: Path) -> CredentialStore:
    return CredentialStore(credentials_path)


class CountingStream(httpx.SyncByteStream):
    """Response body that records how many pieces were read and closes seen."""

    def __init__(self, pieces: Iterable[bytes]) -> None:
        self._pieces: List[bytes] = list(pieces)
        self.yielded = 0
        self.close_count = 0

    def __iter__(self) -> Iterator[bytes]:
        for piece in self._pieces:
            self.yielded += 1
            yield piece

    def close(self) -> None:
        self.close_count += 1

    @property
    def total(self) -> int:
        return len(self._pieces)


class RecordingHandler:
    """``MockTransport`` handler that records requests and delegates replies."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self._responder = responder
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def json_body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)


def sse_pieces(payloads: Iterable[Mapping[str, Any]], *, done: bool = True) -> List[bytes]:
    """Encode payloads as OpenAI-style SSE events, one piece per event."""
    pieces = [f"data: {json.dumps(p)}\n\n".encode() for p in payloads]
    if done:
        pieces.append(b"data: [DONE]\n\n")
    return pieces


def named_sse_pieces(events: Iterable[Mapping[str, Any]]) -> List[bytes]:
    """Encode payloads as SSE events whose ``event:`` field is the payload type."""
    return [f"event: {e['type']}\ndata: {json.dumps(e)}\n\n".encode() for e in events]


@pytest.fixture()
def recording_transport() -> Callable[..., tuple]:
    """Factory returning ``(transport, handler)`` for a responder callable."""

    def make(responder: Callable[[httpx.Request], httpx.Response]):
        handler = RecordingHandler(responder)
        return httpx.MockTransport(handler), handler

    return make


@pytest.fixture()
def sse() -> Callable[..., List[bytes]]:
    return sse_pieces


@pytest.fixture()
def named_sse() -> Callable[..., List[bytes]]:
    return named_sse_pieces


@pytest.fixture()
def counting_stream() -> type:
    return CountingStream
