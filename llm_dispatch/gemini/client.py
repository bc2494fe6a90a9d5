"""GeminiProvider adapter.

Targets Gemini's OpenAI compatibility endpoint (``/v1beta/openai``),
which accepts a bearer API key. The credential may come from
``GEMINI_API_KEY`` or its alias ``GOOGLE_API_KEY``.
"""

from __future__ import annotations

from typing import Optional

import httpx

from ..base.openai_style_parts import BaseOpenAIStyleProvider, _ProviderInit
from ..base.repositories.credentials import Credential
from ..config import get_provider_config


class GeminiProvider(BaseOpenAIStyleProvider):
    """Google Gemini provider built on the OpenAI-style base class."""

    def __init__(
        self,
        credential: Credential,
        *,
        base_url: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        init = _ProviderInit(
            credential=credential,
            base_url=base_url or get_provider_config("gemini")["base_url"],
            logger_name="providers.gemini",
            transport=transport,
        )
        super().__init__(init)

    @property
    def provider_name(self) -> str:
        return "gemini"
