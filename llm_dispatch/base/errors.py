"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``llm_dispatch.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_kind import ErrorKind, PRECONDITION_KINDS
from .errors_parts.provider_error import (
    ConfigurationError,
    DuplicateProviderError,
    ModelNotFoundError,
    ProviderError,
    UnknownProviderError,
)
from .errors_parts.classification import classify_status, normalize_exception

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
