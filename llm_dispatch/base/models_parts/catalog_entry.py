"""
ModelCatalogEntry DTO describing one (provider, model) pair.

Entries are static, read-only metadata: context window, output limit and
pricing. Pricing values are USD per million tokens.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from .chat_response import Usage


@dataclass(frozen=True)
class Pricing:
    """Per-million-token prices in USD."""

    input: float = 0.0
    output: float = 0.0


@dataclass(frozen=True)
class ModelCatalogEntry:
    """Static limits and pricing for a single provider model.

    Attributes:
        provider_id: Registry id of the owning provider.
        model_id: Vendor model identifier sent on the wire.
        context_window_tokens: Maximum prompt + completion tokens.
        max_output_tokens: Maximum completion tokens a request may ask for.
        pricing: :class:`Pricing` for input and output tokens.
        is_default: Whether this entry is used when no model is requested.
    """

    provider_id: str
    model_id: str
    context_window_tokens: int
    max_output_tokens: int
    pricing: Pricing = field(default_factory=Pricing)
    is_default: bool = False

    @property
    def key(self) -> tuple[str, str]:
        return (self.provider_id, self.model_id)

    def estimate_cost(self, usage: Usage) -> float:
        """Return the estimated USD cost for ``usage`` under this entry's pricing."""
        return (
            usage.input_tokens * self.pricing.input
            + usage.output_tokens * self.pricing.output
        ) / 1_000_000


__all__ = ["ModelCatalogEntry", "Pricing"]
