"""Initialization dataclass for OpenAI-style providers.

Encapsulates the constructor parameters shared by every subclass of
``BaseOpenAIStyleProvider``. No I/O occurs here; this is a pure data
container.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

import httpx

from ..repositories.credentials import Credential


@dataclass(frozen=True)
class _ProviderInit:
    """Initialization bundle for ``BaseOpenAIStyleProvider``.

    Attributes:
        credential: Credential bound to this instance; its secret becomes the
            bearer token.
        base_url: API root of the OpenAI-compatible endpoint.
        logger_name: Structured logger name (e.g., ``providers.cerebras``).
        transport: Optional ``httpx`` transport override (tests).
        extra_headers: Vendor-specific static headers.
    """

    credential: Credential
    base_url: str
    logger_name: str
    transport: Optional[httpx.BaseTransport] = None
    extra_headers: Mapping[str, str] = field(default_factory=dict)


__all__ = ["_ProviderInit"]
