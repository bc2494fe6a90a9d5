"""
Structured provider error exception types.

`ProviderError` is the single normalized error shape that crosses the boundary
between provider adapters and the rest of the application. Precondition
subclasses exist so callers can catch them by type while still reading a
uniform ``kind``/``retryable`` pair.
"""
from __future__ import annotations

from typing import Optional

from .error_kind import ErrorKind


class ProviderError(Exception):
    """Represents a normalized failure with an actionable kind.

    Attributes:
        kind: Normalized :class:`ErrorKind` classification for the failure.
        message: Human-readable message suitable for end users and logs.
        retryable: Hint for caller-side retry logic (never acted on internally
            by the CLI).
        provider: Provider id where the error originated, when known.
        model: Optional model id associated with the failure.
        status_code: HTTP status that produced the error, when one existed.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        retryable: bool = False,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.retryable = retryable
        self.provider = provider
        self.model = model
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r}, "
            f"retryable={self.retryable}, provider={self.provider!r})"
        )


class ConfigurationError(ProviderError):
    """Raised when required configuration (usually a credential) is missing or invalid."""

    def __init__(self, message: str, *, provider: Optional[str] = None) -> None:
        super().__init__(ErrorKind.CONFIGURATION, message, provider=provider)


class UnknownProviderError(ProviderError):
    """Raised when a provider id is not present in the registry."""

    def __init__(self, provider: str) -> None:
        super().__init__(
            ErrorKind.UNKNOWN_PROVIDER,
            f"Unknown provider '{provider}'",
            provider=provider,
        )


class ModelNotFoundError(ProviderError):
    """Raised when a (provider, model) pair is absent from the model catalog."""

    def __init__(self, provider: str, model: Optional[str]) -> None:
        if model is None:
            message = f"No models are cataloged for provider '{provider}'"
        else:
            message = f"Model '{model}' is not available for provider '{provider}'"
        super().__init__(
            ErrorKind.MODEL_NOT_FOUND, message, provider=provider, model=model
        )


class DuplicateProviderError(ValueError):
    """Raised when a provider id is registered twice.

    This is a wiring mistake detected at process start rather than a runtime
    outcome, so it sits outside the :class:`ErrorKind` taxonomy.
    """

    def __init__(self, provider: str) -> None:
        super().__init__(f"Provider '{provider}' is already registered")
        self.provider = provider


__all__ = [
    "ProviderError",
    "ConfigurationError",
    "UnknownProviderError",
    "ModelNotFoundError",
    "DuplicateProviderError",
]
