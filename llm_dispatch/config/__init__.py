"""Per-provider configuration layer.

Merge order (later wins):
    1. Built-in defaults (``DEFAULTS``)
    2. Environment variables ``<PROVIDER>_BASE_URL``
    3. In-code overrides passed to :func:`get_provider_config`

Credentials are deliberately not part of this mapping; they are resolved by
:class:`llm_dispatch.base.repositories.credentials.CredentialStore` so that a
secret is only ever read at invocation time.
"""
from __future__ import annotations

import os
from typing import Any, Dict, Optional

import httpx

from ..base.errors import ConfigurationError
from .defaults import (
    ANTHROPIC_DEFAULT_BASE_URL,
    CEREBRAS_DEFAULT_BASE_URL,
    DEEPSEEK_DEFAULT_BASE_URL,
    GEMINI_DEFAULT_BASE_URL,
    GROQ_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_BASE_URL,
    XAI_DEFAULT_BASE_URL,
)
from .env import get_env_var_name

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "cerebras": {"base_url": CEREBRAS_DEFAULT_BASE_URL},
    "groq": {"base_url": GROQ_DEFAULT_BASE_URL},
    "deepseek": {"base_url": DEEPSEEK_DEFAULT_BASE_URL},
    "openrouter": {"base_url": OPENROUTER_DEFAULT_BASE_URL},
    "xai": {"base_url": XAI_DEFAULT_BASE_URL},
    "gemini": {"base_url": GEMINI_DEFAULT_BASE_URL},
    "openai": {"base_url": OPENAI_DEFAULT_BASE_URL},
    "anthropic": {"base_url": ANTHROPIC_DEFAULT_BASE_URL},
    "mock": {},
}

ENV_FIELD_MAP = {
    "base_url": "BASE_URL",
}


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(get_env_var_name(provider, suffix))
        if val:
            out[field] = val
    return out


def _check_base_url(provider: str, value: str) -> None:
    try:
        url = httpx.URL(value)
    except httpx.InvalidURL as exc:
        raise ConfigurationError(f"Invalid base URL for '{provider}': {exc}", provider=provider) from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError(
            f"Invalid base URL for '{provider}': expected an http(s) URL with a host",
            provider=provider,
        )


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged (non-secret) configuration for a provider.

    Raises
    ------
    ConfigurationError
        When the effective ``base_url`` (typically from ``<PROVIDER>_BASE_URL``)
        is not a usable http(s) URL.
    """
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = dict(DEFAULTS.get(name, {}))
    cfg |= _env_overrides(name)
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    if "base_url" in cfg:
        _check_base_url(name, cfg["base_url"])
    return cfg


__all__ = ["DEFAULTS", "get_provider_config"]
