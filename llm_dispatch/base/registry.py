"""Provider Registry.

Purpose
-------
Map a provider id to a factory that builds a :class:`ChatProvider` bound to a
credential. Adding a vendor means one more ``register`` call in the
composition root (:func:`llm_dispatch.di.build_default_registry`); call sites
never change.

Semantics
---------
- Registration is explicit and fail-fast: registering an id twice raises
  :class:`DuplicateProviderError` instead of shadowing the first integration.
- After :meth:`ProviderRegistry.freeze` the table is read-only and safe for
  unsynchronized concurrent reads.
- No import-path strings, entry points, or reflection are involved.
- The registry performs no retries or fallbacks; ``create`` either returns an
  instance or raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

from .errors import ConfigurationError, DuplicateProviderError, UnknownProviderError
from .interfaces import ChatProvider, ProviderFactory
from .logging import get_logger, log_event
from .repositories.credentials import Credential


@dataclass(frozen=True)
class ProviderDescriptor:
    """Registry entry: id, human-facing name and the instance factory."""

    id: str
    display_name: str
    factory: ProviderFactory


class ProviderRegistry:
    """Provider id → :class:`ProviderDescriptor` lookup table."""

    def __init__(self) -> None:
        self._descriptors: Dict[str, ProviderDescriptor] = {}
        self._frozen = False
        self._logger = get_logger("llm_dispatch.registry")

    # ---- registration -------------------------------------------------
    def register(
        self,
        provider_id: str,
        factory: ProviderFactory,
        display_name: Optional[str] = None,
    ) -> ProviderDescriptor:
        """Add a provider.

        Raises
        ------
        DuplicateProviderError
            If ``provider_id`` is already registered.
        RuntimeError
            If the registry has been frozen.
        ValueError
            If ``provider_id`` is blank.
        """
        if self._frozen:
            raise RuntimeError("Provider registry is frozen; register providers at startup")
        pid = (provider_id or "").strip().lower()
        if not pid:
            raise ValueError("Provider id must be a non-empty string")
        if pid in self._descriptors:
            raise DuplicateProviderError(pid)
        descriptor = ProviderDescriptor(id=pid, display_name=display_name or pid, factory=factory)
        self._descriptors[pid] = descriptor
        log_event(self._logger, "registry.register", provider=pid)
        return descriptor

    def freeze(self) -> "ProviderRegistry":
        """Make the table read-only. Returns ``self`` for chaining."""
        self._frozen = True
        return self

    # ---- lookup -------------------------------------------------------
    def create(self, provider_id: str, credential: Credential) -> ChatProvider:
        """Return a new provider instance bound to ``credential``.

        Raises
        ------
        UnknownProviderError
            If ``provider_id`` is not registered (checked before the
            credential, so the outcome does not depend on its value).
        ConfigurationError
            If the credential is empty or issued for another provider.
        """
        pid = (provider_id or "").strip().lower()
        descriptor = self._descriptors.get(pid)
        if descriptor is None:
            raise UnknownProviderError(provider_id)
        if credential is None or not (credential.secret or "").strip():
            raise ConfigurationError(f"An API key is required to use '{pid}'", provider=pid)
        if credential.provider_id != pid:
            raise ConfigurationError(
                f"Credential for '{credential.provider_id}' cannot be used with '{pid}'",
                provider=pid,
            )
        log_event(self._logger, "registry.create", provider=pid, credential_source=credential.source)
        return descriptor.factory(credential)

    def descriptor(self, provider_id: str) -> ProviderDescriptor:
        pid = (provider_id or "").strip().lower()
        try:
            return self._descriptors[pid]
        except KeyError:
            raise UnknownProviderError(provider_id) from None

    @property
    def descriptors(self) -> Mapping[str, ProviderDescriptor]:
        """Read-only view of the table in registration order."""
        return MappingProxyType(self._descriptors)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def ids(self) -> Tuple[str, ...]:
        return tuple(self._descriptors)

    def __contains__(self, provider_id: object) -> bool:
        return isinstance(provider_id, str) and provider_id.strip().lower() in self._descriptors

    def __iter__(self) -> Iterator[ProviderDescriptor]:
        return iter(tuple(self._descriptors.values()))

    def __len__(self) -> int:
        return len(self._descriptors)


__all__ = ["ProviderDescriptor", "ProviderRegistry"]
