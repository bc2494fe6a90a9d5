"""Static model catalog data.

Versioned independently of provider code: adding a model is a one-line change
here and never touches the registry. Prices are USD per million tokens.
"""

from __future__ import annotations

from typing import Tuple

from ..models import ModelCatalogEntry, Pricing

CATALOG_VERSION = "2026.10"


def _entry(
    provider_id: str,
    model_id: str,
    context: int,
    max_out: int,
    price_in: float,
    price_out: float,
    *,
    default: bool = False,
) -> ModelCatalogEntry:
    return ModelCatalogEntry(
        provider_id=provider_id,
        model_id=model_id,
        context_window_tokens=context,
        max_output_tokens=max_out,
        pricing=Pricing(input=price_in, output=price_out),
        is_default=default,
    )


CATALOG_ENTRIES: Tuple[ModelCatalogEntry, ...] = (
    # Cerebras
    _entry("cerebras", "llama3.1-8b", 8192, 8192, 0.10, 0.10, default=True),
    _entry("cerebras", "llama-3.3-70b", 65536, 8192, 0.85, 1.20),
    _entry("cerebras", "qwen-3-32b", 65536, 8192, 0.40, 0.80),
    # Groq
    _entry("groq", "llama-3.1-8b-instant", 131072, 8192, 0.05, 0.08, default=True),
    _entry("groq", "llama-3.3-70b-versatile", 131072, 32768, 0.59, 0.79),
    # DeepSeek
    _entry("deepseek", "deepseek-chat", 65536, 8192, 0.27, 1.10, default=True),
    _entry("deepseek", "deepseek-reasoner", 65536, 8192, 0.55, 2.19),
    # OpenRouter (pricing depends on the routed model)
    _entry("openrouter", "openrouter/auto", 200000, 32000, 0.0, 0.0, default=True),
    _entry("openrouter", "meta-llama/llama-3.1-8b-instruct", 131072, 8192, 0.02, 0.05),
    # xAI
    _entry("xai", "grok-3-mini", 131072, 16384, 0.30, 0.50, default=True),
    _entry("xai", "grok-4", 256000, 32768, 3.00, 15.00),
    # Google Gemini (OpenAI-compatible endpoint)
    _entry("gemini", "gemini-2.5-flash", 1048576, 65536, 0.30, 2.50, default=True),
    _entry("gemini", "gemini-2.5-pro", 1048576, 65536, 1.25, 10.00),
    # OpenAI
    _entry("openai", "gpt-4o-mini", 128000, 16384, 0.15, 0.60, default=True),
    _entry("openai", "gpt-4o", 128000, 16384, 2.50, 10.00),
    _entry("openai", "gpt-4.1-mini", 1047576, 32768, 0.40, 1.60),
    # Anthropic
    _entry("anthropic", "claude-3-5-haiku-latest", 200000, 8192, 0.80, 4.00, default=True),
    _entry("anthropic", "claude-sonnet-4-20250514", 200000, 64000, 3.00, 15.00),
    # Offline mock
    _entry("mock", "mock-echo", 8192, 1024, 0.0, 0.0, default=True),
)


__all__ = ["CATALOG_VERSION", "CATALOG_ENTRIES"]
