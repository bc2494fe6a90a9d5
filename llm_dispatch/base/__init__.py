"""
Dispatch Base Package

Exports the provider-agnostic building blocks used by adapters, the DI
composition root and the CLI:

- Errors: normalized error taxonomy and the exception normalizer
- Models (DTOs): messages, options, responses and catalog entries
- Interfaces: the ``ChatProvider`` contract and factory shape
- Repositories: credential store
- Registry/Catalog: provider lookup and static model data
- Invoker/Streaming: uniform invocation and cancellable streams
"""

from .errors import (
    ConfigurationError,
    DuplicateProviderError,
    ErrorKind,
    ModelNotFoundError,
    ProviderError,
    UnknownProviderError,
    normalize_exception,
)
from .models import (
    ChatMessage,
    ChatRequestOptions,
    ChatResponse,
    ChatResponseChunk,
    ModelCatalogEntry,
    Pricing,
    Role,
    Usage,
)
from .interfaces import ChatProvider, ProviderFactory
from .repositories.credentials import Credential, CredentialStore
from .registry import ProviderDescriptor, ProviderRegistry
from .catalog import ModelCatalog, default_catalog
from .cancellation import CancellationToken, CancelledError
from .streaming import ChatStream
from .resilience.retry import RetryConfig
from .timeouts import TimeoutConfig, get_timeout_config
from .invoker import ChatInvoker

__all__ = [
    # Errors
    "ErrorKind",
    "ProviderError",
    "ConfigurationError",
    "UnknownProviderError",
    "ModelNotFoundError",
    "DuplicateProviderError",
    "normalize_exception",
    # Models
    "Role",
    "ChatMessage",
    "ChatRequestOptions",
    "ChatResponse",
    "ChatResponseChunk",
    "Usage",
    "ModelCatalogEntry",
    "Pricing",
    # Interfaces
    "ChatProvider",
    "ProviderFactory",
    # Repositories
    "Credential",
    "CredentialStore",
    # Registry & catalog
    "ProviderDescriptor",
    "ProviderRegistry",
    "ModelCatalog",
    "default_catalog",
    # Invocation
    "ChatInvoker",
    "ChatStream",
    "RetryConfig",
    "CancellationToken",
    "CancelledError",
    "TimeoutConfig",
    "get_timeout_config",
]
