"""llm_dispatch package

Dispatch chat requests to pluggable AI model providers from one CLI.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError`, :class:`ErrorKind` and the
      precondition subclasses
    - DTOs: :class:`ChatMessage`, :class:`ChatRequestOptions`,
      :class:`ChatResponse`, :class:`ChatResponseChunk`
    - Services: :class:`ProviderRegistry`, :class:`ModelCatalog`,
      :class:`CredentialStore`, :class:`ChatInvoker`
    - Helpers: :func:`build_default_registry`, :func:`create`

Example:
    provider = create("cerebras")
    reply = ChatInvoker(default_catalog()).chat(
        provider, [ChatMessage.user("hello")], ChatRequestOptions()
    )
"""

from typing import Optional

from .base import (
    ChatInvoker,
    ChatMessage,
    ChatProvider,
    ChatRequestOptions,
    ChatResponse,
    ChatResponseChunk,
    ChatStream,
    ConfigurationError,
    CredentialStore,
    ErrorKind,
    ModelCatalog,
    ModelNotFoundError,
    ProviderError,
    ProviderRegistry,
    UnknownProviderError,
    default_catalog,
)
from .di import build_container, build_default_registry

__version__ = "0.3.0"


def create(
    provider_id: str,
    *,
    store: Optional[CredentialStore] = None,
    registry: Optional[ProviderRegistry] = None,
) -> ChatProvider:
    """Create a provider instance using the stored or environment credential.

    Raises
    ------
    UnknownProviderError
        When ``provider_id`` is not registered.
    ConfigurationError
        When no credential is configured for it.
    """
    registry = registry or build_default_registry()
    # Unknown ids fail before the credential lookup.
    registry.descriptor(provider_id)
    credential = (store or CredentialStore()).resolve(provider_id)
    return registry.create(provider_id, credential)


__all__ = [
    "__version__",
    "create",
    "build_container",
    "build_default_registry",
    "ProviderError",
    "ErrorKind",
    "ConfigurationError",
    "UnknownProviderError",
    "ModelNotFoundError",
    "ChatMessage",
    "ChatRequestOptions",
    "ChatResponse",
    "ChatResponseChunk",
    "ChatStream",
    "ChatProvider",
    "ChatInvoker",
    "ProviderRegistry",
    "ModelCatalog",
    "CredentialStore",
    "default_catalog",
]
