"""Structured logging utilities shared by every layer.

Rationale:
- One place configures the ``llm_dispatch`` logger (JSON lines on stderr).
- Modules obtain child loggers via :func:`get_logger` and emit events with
  :func:`log_event` / :func:`normalized_log_event` instead of ad-hoc strings.

The base level comes from ``LLM_DISPATCH_LOG_LEVEL`` (default ``WARNING``) and
can be changed at runtime with :func:`configure_logger`.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from ..config.defaults import APP_NAME, DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV
from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = APP_NAME

_BASE_LOGGER_ATTR = "_llm_dispatch_logger_initialized"
_FILE_HANDLER_ATTR = "_llm_dispatch_file_handler"


class _StderrHandler(logging.StreamHandler):
    """Stream handler that always writes to the current ``sys.stderr``.

    Looking the stream up per record keeps output correct when ``sys.stderr``
    is swapped after configuration (test capture, CLI redirection).
    """

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self):  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


def _parse_level(value: str | int | None, default: int = logging.WARNING) -> int:
    """Parse a logging level name or number into an integer constant.

    Accepts DEBUG, INFO, WARN/WARNING, ERROR and CRITICAL case-insensitively.
    Falls back to ``default`` on unknown values.
    """
    if value is None or value == "":
        return default
    if isinstance(value, int):
        return value
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _ensure_base_logger() -> logging.Logger:
    """Initialize (once) and return the shared base logger."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        return logger
    level = _parse_level(os.getenv(LOG_LEVEL_ENV), default=_parse_level(DEFAULT_LOG_LEVEL))
    logger.setLevel(level)
    handler = _StderrHandler()
    handler.setFormatter(JsonFormatter())
    logger.handlers[:] = [handler]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME) -> logging.Logger:
    """Return ``name`` as a child of the configured base logger.

    Names outside the ``llm_dispatch`` hierarchy are nested under it so every
    event flows through the same handler.
    """
    base = _ensure_base_logger()
    if name == BASE_LOGGER_NAME:
        return base
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
) -> logging.Logger:
    """Reconfigure the shared logger at runtime.

    Parameters
    ----------
    level: int | str | None
        Desired level (number or name). ``None`` keeps the current level.
    file_path: Optional[str]
        When given, attach (or retarget) a rotating JSON file handler. When
        ``None``, any file handler previously attached here is removed.

    Returns
    -------
    logging.Logger
        The base logger.
    """
    logger = _ensure_base_logger()
    if level is not None:
        logger.setLevel(_parse_level(level, default=logger.level))

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    abs_path = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for h in managed:
        if abs_path is not None and getattr(h, "baseFilename", None) == abs_path:
            continue
        logger.removeHandler(h)
        with contextlib.suppress(OSError):
            h.close()
    if abs_path is None or any(getattr(h, "baseFilename", None) == abs_path for h in logger.handlers):
        return logger

    os.makedirs(os.path.dirname(abs_path), exist_ok=True)
    fh = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    setattr(fh, _FILE_HANDLER_ATTR, True)
    fh.setFormatter(JsonFormatter())
    logger.addHandler(fh)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit a single structured event.

    Parameters
    ----------
    logger: logging.Logger
        Logger obtained from :func:`get_logger`.
    event: str
        Dotted event name (e.g. ``stream.start``).
    ctx: LogContext | None
        Provider/model context merged into the payload.
    level: int
        Logging level for the record.
    keep_none: bool
        Preserve keys whose values are ``None`` (encoded as ``null``).
    **fields: Any
        JSON-serializable key/value pairs.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = ("phase", "attempt", "error_kind", "emitted", "tokens")


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_kind: str | None = None,
    emitted: bool | None = None,
    tokens: Any = None,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit an invocation lifecycle event with the canonical key set.

    ``phase``, ``attempt``, ``emitted`` and ``tokens`` are always present;
    ``error_kind`` is omitted when ``None``. Extra fields never overwrite the
    normalized keys.
    """
    base_fields: Dict[str, Any] = {
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
        "tokens": tokens,
    }
    if error_kind is not None:
        base_fields["error_kind"] = error_kind
    for k, v in extra_fields.items():
        if v is None or k in base_fields:
            continue
        base_fields[k] = v
    log_event(logger, event, ctx, level=level, keep_none=True, **base_fields)


__all__ = [
    "BASE_LOGGER_NAME",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
