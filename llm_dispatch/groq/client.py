"""GroqProvider adapter.

Groq serves its models behind an OpenAI-compatible API rooted at
``/openai/v1``; behavior is inherited from ``BaseOpenAIStyleProvider``.
"""

from __future__ import annotations

from typing import Optional

import httpx

from ..base.openai_style_parts import BaseOpenAIStyleProvider, _ProviderInit
from ..base.repositories.credentials import Credential
from ..config import get_provider_config


class GroqProvider(BaseOpenAIStyleProvider):
    """Groq provider built on the OpenAI-style base class."""

    def __init__(
        self,
        credential: Credential,
        *,
        base_url: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        init = _ProviderInit(
            credential=credential,
            base_url=base_url or get_provider_config("groq")["base_url"],
            logger_name="providers.groq",
            transport=transport,
        )
        super().__init__(init)

    @property
    def provider_name(self) -> str:
        return "groq"
