"""Timeout configuration for HTTP transports.

The provider contract itself implies no timeout; these values only bound
individual HTTP operations so a dead connection eventually surfaces as a
``transient`` error. Callers wanting an end-to-end deadline wrap the call and
cancel the stream.

Supported environment variables (optional, positive floats):
    LLM_DISPATCH_HTTP_TIMEOUT_SECONDS
    LLM_DISPATCH_STREAM_TIMEOUT_SECONDS
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx

from ..config.defaults import (
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_STREAM_TIMEOUT_SECONDS,
    HTTP_TIMEOUT_ENV,
    STREAM_TIMEOUT_ENV,
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Normalized timeout values in seconds.

    Attributes:
        http_timeout_seconds: Connect/read/write bound for blocking requests.
        stream_timeout_seconds: Read bound between streamed chunks.
    """

    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    stream_timeout_seconds: float = DEFAULT_STREAM_TIMEOUT_SECONDS

    def to_httpx(self) -> httpx.Timeout:
        return httpx.Timeout(self.http_timeout_seconds, read=self.stream_timeout_seconds)


def _parse_env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return a :class:`TimeoutConfig` built from the current environment."""
    return TimeoutConfig(
        http_timeout_seconds=_parse_env_float(HTTP_TIMEOUT_ENV, DEFAULT_HTTP_TIMEOUT_SECONDS),
        stream_timeout_seconds=_parse_env_float(STREAM_TIMEOUT_ENV, DEFAULT_STREAM_TIMEOUT_SECONDS),
    )


__all__ = ["TimeoutConfig", "get_timeout_config"]
