"""Mock provider package exposing a deterministic offline adapter."""

from .client import ECHO_PREFIX, MockProvider

__all__ = ["MockProvider", "ECHO_PREFIX"]
