"""Dependency wiring for the CLI and embedding applications."""

from .container import DEFAULT_PROVIDERS, ProvidersContainer, build_container, build_default_registry

__all__ = ["DEFAULT_PROVIDERS", "ProvidersContainer", "build_container", "build_default_registry"]
