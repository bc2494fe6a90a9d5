"""HTTP client construction and server-sent-event reading.

Purpose:
    Give HTTP-based adapters one way to build an ``httpx.Client`` and one way
    to read OpenAI-style SSE streams, so transport details stay out of the
    adapters' request/response translation.

External dependencies:
    - ``httpx`` for the synchronous HTTP client.

Lifecycle & cleanup:
    - Each provider instance owns its client (one command = one instance).
      Clients are closed by the adapter's ``close()``.
    - :func:`iter_sse_data` is meant to be consumed inside a
      ``client.stream(...)`` block; closing the consuming generator exits the
      block and closes the response.
"""

from __future__ import annotations

from typing import Iterator, Mapping, Optional

import httpx

from ..timeouts import get_timeout_config

SSE_DATA_PREFIX = "data:"
SSE_DONE = "[DONE]"


def build_http_client(
    base_url: str,
    *,
    headers: Optional[Mapping[str, str]] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """Return an ``httpx.Client`` bound to ``base_url`` with configured timeouts.

    Parameters:
        base_url: API root; request paths are relative to it.
        headers: Static headers (authorization, content type).
        transport: Optional transport override, e.g. ``httpx.MockTransport``
            in tests.
    """
    return httpx.Client(
        base_url=base_url,
        headers=dict(headers or {}),
        timeout=get_timeout_config().to_httpx(),
        transport=transport,
    )


def iter_sse_data(response: httpx.Response) -> Iterator[str]:
    """Yield the ``data:`` payloads of an SSE response until ``[DONE]``.

    Comment lines (``:``), ``event:``/``id:`` fields and blank separators are
    skipped. Multi-line ``data:`` fields are not joined; OpenAI-compatible
    APIs emit one JSON document per line.
    """
    for line in response.iter_lines():
        if not line or not line.startswith(SSE_DATA_PREFIX):
            continue
        data = line[len(SSE_DATA_PREFIX):].strip()
        if data == SSE_DONE:
            return
        if data:
            yield data


__all__ = ["build_http_client", "iter_sse_data", "SSE_DONE"]
