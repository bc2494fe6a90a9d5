"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `llm_dispatch.base.errors` for the stable surface.
"""

from .error_kind import ErrorKind, PRECONDITION_KINDS
from .provider_error import (
    ConfigurationError,
    DuplicateProviderError,
    ModelNotFoundError,
    ProviderError,
    UnknownProviderError,
)
from .classification import classify_status, normalize_exception

__all__ = [
    "ErrorKind",
    "PRECONDITION_KINDS",
    "ProviderError",
    "ConfigurationError",
    "UnknownProviderError",
    "ModelNotFoundError",
    "DuplicateProviderError",
    "classify_status",
    "normalize_exception",
]
