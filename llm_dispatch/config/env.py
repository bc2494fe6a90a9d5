"""llm_dispatch.config.env
=======================

Environment variable naming and lookup for provider credentials.

Purpose
-------
- Single source of truth for the ``<PROVIDER_ID>_API_KEY`` convention.
- Small, framework-agnostic helpers used by the credential store.

Design Notes
------------
- The canonical name is derived from the provider id: upper-cased, with
  ``-`` and ``.`` replaced by ``_`` (``my-vendor`` → ``MY_VENDOR_API_KEY``).
- Some vendors historically accept more than one variable name; those are
  listed in ``ENV_ALIASES`` and consulted after the canonical name.

Failure Modes
-------------
Helpers never raise on unknown providers or unset variables; callers decide
how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Mapping, Optional, Tuple

API_KEY_SUFFIX = "API_KEY"

# Provider → extra accepted env var names, consulted after the canonical one.
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GOOGLE_API_KEY",),
}


def env_prefix(provider: str) -> str:
    """Return the env var prefix for a provider id (``"cerebras"`` → ``"CEREBRAS"``)."""
    return (provider or "").strip().upper().replace("-", "_").replace(".", "_")


def get_env_var_name(provider: str, suffix: str = API_KEY_SUFFIX) -> str:
    """Return the canonical environment variable name for a provider setting."""
    return f"{env_prefix(provider)}_{suffix}"


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable API key variable names for a provider, canonical first."""
    canonical = get_env_var_name(provider)
    yield canonical
    for alias in ENV_ALIASES.get((provider or "").lower(), ()):  # pragma: no branch - small tuples
        if alias != canonical:
            yield alias


def resolve_provider_key(
    provider: str, environ: Optional[Mapping[str, str]] = None
) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for a provider from the environment.

    Parameters
    ----------
    provider: str
        Provider identifier (case-insensitive).
    environ: Optional[Mapping[str, str]]
        Mapping to read from; defaults to ``os.environ``.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)`` for the first non-blank candidate, or
        ``(None, None)`` when nothing is set.
    """
    env = os.environ if environ is None else environ
    for name in get_env_var_candidates(provider):
        val = env.get(name)
        if val and val.strip():
            return val.strip(), name
    return None, None


__all__ = [
    "API_KEY_SUFFIX",
    "ENV_ALIASES",
    "env_prefix",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_provider_key",
]
