"""OpenRouterProvider adapter.

OpenRouter routes requests to many upstream vendors behind one
OpenAI-compatible API. The ``X-Title`` attribution header identifies this
client in OpenRouter's dashboards.
"""

from __future__ import annotations

from typing import Optional

import httpx

from ..base.openai_style_parts import BaseOpenAIStyleProvider, _ProviderInit
from ..base.repositories.credentials import Credential
from ..config import get_provider_config

OPENROUTER_HEADERS = {
    "X-Title": "llm-dispatch",
}


class OpenRouterProvider(BaseOpenAIStyleProvider):
    """OpenRouter provider built on the OpenAI-style base class."""

    def __init__(
        self,
        credential: Credential,
        *,
        base_url: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        init = _ProviderInit(
            credential=credential,
            base_url=base_url or get_provider_config("openrouter")["base_url"],
            logger_name="providers.openrouter",
            transport=transport,
            extra_headers=OPENROUTER_HEADERS,
        )
        super().__init__(init)

    @property
    def provider_name(self) -> str:
        return "openrouter"
