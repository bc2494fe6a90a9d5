"""DeepseekProvider adapter.

Uses the OpenAI-compatible Chat Completions API for shared chat/stream
logic while keeping DeepSeek's base URL and provider name.
"""

from __future__ import annotations

from typing import Optional

import httpx

from ..base.openai_style_parts import BaseOpenAIStyleProvider, _ProviderInit
from ..base.repositories.credentials import Credential
from ..config import get_provider_config


class DeepseekProvider(BaseOpenAIStyleProvider):
    """DeepSeek provider built on the OpenAI-style base class."""

    def __init__(
        self,
        credential: Credential,
        *,
        base_url: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        init = _ProviderInit(
            credential=credential,
            base_url=base_url or get_provider_config("deepseek")["base_url"],
            logger_name="providers.deepseek",
            transport=transport,
        )
        super().__init__(init)

    @property
    def provider_name(self) -> str:
        return "deepseek"
