"""Model parts package: one DTO family per module."""

from .message import ChatMessage, Role, ROLES
from .chat_response import ChatResponse, ChatResponseChunk, Usage
from .catalog_entry import ModelCatalogEntry, Pricing
from .chat_options import ChatRequestOptions

__all__ = [
    "ChatMessage",
    "Role",
    "ROLES",
    "ChatResponse",
    "ChatResponseChunk",
    "Usage",
    "ModelCatalogEntry",
    "Pricing",
    "ChatRequestOptions",
]
