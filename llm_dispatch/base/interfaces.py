"""Provider interfaces public surface.

Also defines :data:`ProviderFactory`, the callable shape the registry stores.
"""

from __future__ import annotations

from typing import Callable

from .interfaces_parts.chat_provider import ChatProvider
from .repositories.credentials import Credential

# Builds a provider instance bound to one credential.
ProviderFactory = Callable[[Credential], ChatProvider]

__all__ = ["ChatProvider", "ProviderFactory"]
