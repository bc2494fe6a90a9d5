"""CerebrasProvider adapter.

Cerebras Inference exposes an OpenAI-compatible Chat Completions endpoint,
so all request/response translation and streaming is inherited from
``BaseOpenAIStyleProvider``. Only the provider id and base URL
(``CEREBRAS_BASE_URL`` overrides the default) are specific here.
"""

from __future__ import annotations

from typing import Optional

import httpx

from ..base.openai_style_parts import BaseOpenAIStyleProvider, _ProviderInit
from ..base.repositories.credentials import Credential
from ..config import get_provider_config


class CerebrasProvider(BaseOpenAIStyleProvider):
    """Cerebras provider built on the OpenAI-style base class."""

    def __init__(
        self,
        credential: Credential,
        *,
        base_url: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        init = _ProviderInit(
            credential=credential,
            base_url=base_url or get_provider_config("cerebras")["base_url"],
            logger_name="providers.cerebras",
            transport=transport,
        )
        super().__init__(init)

    @property
    def provider_name(self) -> str:
        return "cerebras"
