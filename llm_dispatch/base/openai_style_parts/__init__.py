"""OpenAI-compatible HTTP adapter base.

Re-exports provide a stable import surface for vendor modules.
"""

from .base import BaseOpenAIStyleProvider
from .provider_init import _ProviderInit
from .style_helpers import CHAT_COMPLETIONS_PATH, build_chat_body, parse_stream_chunk

__all__ = [
    "BaseOpenAIStyleProvider",
    "_ProviderInit",
    "CHAT_COMPLETIONS_PATH",
    "build_chat_body",
    "parse_stream_chunk",
]
