"""Composition root: provider registration and shared services.

Goals:
- Keep the list of supported vendors in exactly one place
  (:data:`DEFAULT_PROVIDERS`); adding a vendor is one more tuple here.
- Build the registry, catalog, credential store and invoker once per process
  and hand them to the CLI as a single container.

An optional ``httpx`` transport is threaded into every network adapter so
tests can run the full stack against ``httpx.MockTransport``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Mapping, Optional, Tuple

import httpx

from ..anthropic import AnthropicProvider
from ..base.catalog import ModelCatalog, default_catalog
from ..base.interfaces import ChatProvider
from ..base.invoker import ChatInvoker
from ..base.registry import ProviderRegistry
from ..base.repositories.credentials import Credential, CredentialStore
from ..base.resilience.retry import SINGLE_ATTEMPT, RetryConfig
from ..cerebras import CerebrasProvider
from ..deepseek import DeepseekProvider
from ..gemini import GeminiProvider
from ..groq import GroqProvider
from ..mock import MockProvider
from ..openai import OpenAIProvider
from ..openrouter import OpenRouterProvider
from ..xai import XAIProvider

Transport = Optional[httpx.BaseTransport]
FactoryBuilder = Callable[[Transport], Callable[[Credential], ChatProvider]]


def _sdk_http_client(transport: Transport) -> Optional[httpx.Client]:
    return httpx.Client(transport=transport) if transport is not None else None


# (id, display name, factory builder). Order is the order shown by the CLI.
DEFAULT_PROVIDERS: List[Tuple[str, str, FactoryBuilder]] = [
    ("cerebras", "Cerebras", lambda t: lambda cred: CerebrasProvider(cred, transport=t)),
    ("groq", "Groq", lambda t: lambda cred: GroqProvider(cred, transport=t)),
    ("deepseek", "DeepSeek", lambda t: lambda cred: DeepseekProvider(cred, transport=t)),
    ("openrouter", "OpenRouter", lambda t: lambda cred: OpenRouterProvider(cred, transport=t)),
    ("xai", "xAI", lambda t: lambda cred: XAIProvider(cred, transport=t)),
    ("gemini", "Google Gemini", lambda t: lambda cred: GeminiProvider(cred, transport=t)),
    ("openai", "OpenAI", lambda t: lambda cred: OpenAIProvider(cred, http_client=_sdk_http_client(t))),
    ("anthropic", "Anthropic", lambda t: lambda cred: AnthropicProvider(cred, http_client=_sdk_http_client(t))),
    ("mock", "Mock (offline echo)", lambda t: lambda cred: MockProvider(cred)),
]


def build_default_registry(*, transport: Transport = None) -> ProviderRegistry:
    """Register every built-in provider and return the frozen registry."""
    registry = ProviderRegistry()
    for provider_id, display_name, builder in DEFAULT_PROVIDERS:
        registry.register(provider_id, builder(transport), display_name=display_name)
    return registry.freeze()


@dataclass
class ProvidersContainer:
    """Bundle of the process-wide services the CLI depends on."""

    registry: ProviderRegistry
    catalog: ModelCatalog
    store: CredentialStore
    invoker: ChatInvoker


def build_container(
    *,
    registry: Optional[ProviderRegistry] = None,
    catalog: Optional[ModelCatalog] = None,
    store: Optional[CredentialStore] = None,
    environ: Optional[Mapping[str, str]] = None,
    retry_config: RetryConfig = SINGLE_ATTEMPT,
    transport: Transport = None,
) -> ProvidersContainer:
    """Construct a :class:`ProvidersContainer`, filling in defaults.

    Args:
        registry: Pre-built registry; defaults to :func:`build_default_registry`.
        catalog: Model catalog; defaults to the bundled data.
        store: Credential store; defaults to the standard file location.
        environ: Environment mapping for a default store (tests).
        retry_config: Retry policy for blocking invocations.
        transport: ``httpx`` transport override for network adapters.
    """
    catalog = catalog or default_catalog()
    return ProvidersContainer(
        registry=registry or build_default_registry(transport=transport),
        catalog=catalog,
        store=store or CredentialStore(environ=environ),
        invoker=ChatInvoker(catalog, retry_config=retry_config),
    )


__all__ = [
    "DEFAULT_PROVIDERS",
    "ProvidersContainer",
    "build_container",
    "build_default_registry",
]
