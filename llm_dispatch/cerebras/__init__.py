"""Cerebras provider package."""

from .client import CerebrasProvider

__all__ = ["CerebrasProvider"]
