"""
Message DTO used across providers.

Defines the immutable `ChatMessage` dataclass and the `Role` literal. Adapters
translate these into vendor message shapes at their own boundary.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Tuple

# Message roles accepted by every provider.
Role = Literal["system", "user", "assistant"]

ROLES: Tuple[str, ...] = ("system", "user", "assistant")


@dataclass(frozen=True)
class ChatMessage:
    """A single chat message.

    Attributes:
        role: Author role (``"system"``, ``"user"`` or ``"assistant"``).
        content: Plain text content.

    Raises:
        ValueError: When ``role`` is not one of :data:`ROLES` or ``content``
            is not a string.
    """

    role: Role
    content: str

    def __post_init__(self) -> None:
        if self.role not in ROLES:
            raise ValueError(f"Unsupported message role '{self.role}'")
        if not isinstance(self.content, str):
            raise ValueError("Message content must be a string")

    def to_dict(self) -> Dict[str, str]:
        """Return the ``{"role", "content"}`` mapping used by JSON chat APIs."""
        return {"role": self.role, "content": self.content}

    @classmethod
    def user(cls, content: str) -> "ChatMessage":
        return cls(role="user", content=content)

    @classmethod
    def system(cls, content: str) -> "ChatMessage":
        return cls(role="system", content=content)


__all__ = ["ChatMessage", "Role", "ROLES"]
