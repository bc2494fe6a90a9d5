"""Provider-agnostic DTOs (public surface).

Implementations live under ``llm_dispatch.base.models_parts``; import from
here for a stable path.
"""

from .models_parts import (
    ROLES,
    ChatMessage,
    ChatRequestOptions,
    ChatResponse,
    ChatResponseChunk,
    ModelCatalogEntry,
    Pricing,
    Role,
    Usage,
)

__all__ = [
    "ChatMessage",
    "Role",
    "ROLES",
    "ChatRequestOptions",
    "ChatResponse",
    "ChatResponseChunk",
    "Usage",
    "ModelCatalogEntry",
    "Pricing",
]
