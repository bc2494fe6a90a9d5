"""Interface parts package (one protocol per module)."""

from .chat_provider import ChatProvider

__all__ = ["ChatProvider"]
