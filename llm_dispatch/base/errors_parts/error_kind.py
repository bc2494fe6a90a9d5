"""
Normalized error kinds (taxonomy).

Defines the `ErrorKind` enumeration used by the error normalizer and every
layer above the provider boundary. Values are lowercase snake_case and are a
stable public contract for logging and CLI output.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Enumerated failure categories surfaced to callers."""

    CONFIGURATION = "configuration"
    UNKNOWN_PROVIDER = "unknown_provider"
    MODEL_NOT_FOUND = "model_not_found"
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    TRANSIENT = "transient"
    PROVIDER_OTHER = "provider_other"


# Kinds detected locally before any network attempt.
PRECONDITION_KINDS = frozenset(
    {ErrorKind.CONFIGURATION, ErrorKind.UNKNOWN_PROVIDER, ErrorKind.MODEL_NOT_FOUND}
)


__all__ = ["ErrorKind", "PRECONDITION_KINDS"]
