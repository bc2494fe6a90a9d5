"""
Error normalization mapping transport failures to :class:`ProviderError`.

Implements HTTP status extraction and status-to-kind mapping that works for
``httpx`` errors as well as the ``openai`` and ``anthropic`` SDK exception
hierarchies without importing either SDK. Normalization happens once, at the
boundary between a provider instance and the chat invoker; nothing above that
boundary inspects vendor-specific error shapes.
"""
from __future__ import annotations

from typing import Iterator, Optional, Tuple

import httpx

from .error_kind import ErrorKind
from .provider_error import ProviderError

_MAX_CAUSE_DEPTH = 8


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from a provider exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code`` (openai/anthropic ``APIStatusError``)
    - ``exc.status``
    - ``exc.response.status_code`` (``httpx.HTTPStatusError``)
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def _cause_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield ``exc`` followed by its explicit or implicit causes."""
    seen = 0
    current: Optional[BaseException] = exc
    while current is not None and seen < _MAX_CAUSE_DEPTH:
        yield current
        seen += 1
        current = current.__cause__ or current.__context__


def _is_connection_failure(exc: BaseException) -> bool:
    """Return True when the failure (or one of its causes) is transport-level.

    SDK connection errors wrap the underlying ``httpx`` exception via
    ``raise ... from err``, so the cause chain is inspected as well.
    """
    return any(
        isinstance(e, (httpx.TransportError, ConnectionError, TimeoutError))
        for e in _cause_chain(exc)
    )


def classify_status(status: int) -> Tuple[ErrorKind, bool]:
    """Map a non-2xx HTTP status to ``(kind, retryable)``."""
    if status in (401, 403):
        return ErrorKind.AUTHENTICATION, False
    if status == 429:
        return ErrorKind.RATE_LIMIT, True
    if 500 <= status < 600:
        return ErrorKind.TRANSIENT, True
    return ErrorKind.PROVIDER_OTHER, False


_STATUS_MESSAGES = {
    ErrorKind.AUTHENTICATION: "{provider} rejected the credential (HTTP {status}); run 'configure' to update it",
    ErrorKind.RATE_LIMIT: "{provider} rate limit reached (HTTP {status}); try again later",
    ErrorKind.TRANSIENT: "{provider} is temporarily unavailable (HTTP {status})",
    ErrorKind.PROVIDER_OTHER: "{provider} returned an error (HTTP {status})",
}


def normalize_exception(
    exc: BaseException,
    *,
    provider: str,
    model: Optional[str] = None,
) -> ProviderError:
    """Classify an exception into a normalized :class:`ProviderError`.

    Precedence:
        1. ``ProviderError`` passthrough (already normalized).
        2. HTTP status mapping.
        3. Connection failures and timeouts (``transient``).
        4. ``provider_other`` fallback for anything else.

    Parameters
    ----------
    exc:
        Exception raised by a provider instance.
    provider:
        Provider id used to phrase the message.
    model:
        Optional model id attached to the result.

    Returns
    -------
    ProviderError
        Normalized error; the original exception is never embedded in the
        message so raw payloads are not leaked to users.
    """
    if isinstance(exc, ProviderError):
        if exc.provider is None:
            exc.provider = provider
        if exc.model is None:
            exc.model = model
        return exc

    status = _extract_status(exc)
    if status is not None and status >= 300:
        kind, retryable = classify_status(status)
        message = _STATUS_MESSAGES[kind].format(provider=provider, status=status)
        return ProviderError(
            kind,
            message,
            retryable=retryable,
            provider=provider,
            model=model,
            status_code=status,
        )

    if _is_connection_failure(exc):
        return ProviderError(
            ErrorKind.TRANSIENT,
            f"Could not reach {provider} ({type(exc).__name__})",
            retryable=True,
            provider=provider,
            model=model,
        )

    return ProviderError(
        ErrorKind.PROVIDER_OTHER,
        f"{provider} request failed ({type(exc).__name__})",
        retryable=False,
        provider=provider,
        model=model,
    )


__all__ = [
    "normalize_exception",
    "classify_status",
    "_extract_status",
]
