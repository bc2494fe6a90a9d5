"""Model Catalog.

Read-only lookup of :class:`ModelCatalogEntry` by ``(provider_id, model_id)``.
Built once from static data; uniqueness of the key and of the per-provider
default are enforced at construction.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..errors import ModelNotFoundError
from ..models import ModelCatalogEntry
from .catalog_data import CATALOG_ENTRIES, CATALOG_VERSION


class ModelCatalog:
    """Immutable table of known models.

    Parameters
    ----------
    entries:
        Catalog rows. A provider's default is the row flagged ``is_default``,
        or its first row when none is flagged.
    version:
        Data version label, reported by the CLI ``models`` command.

    Raises
    ------
    ValueError
        On a duplicate ``(provider_id, model_id)`` pair or on more than one
        flagged default for a provider.
    """

    def __init__(self, entries: Iterable[ModelCatalogEntry], version: str = "custom") -> None:
        table: Dict[Tuple[str, str], ModelCatalogEntry] = {}
        defaults: Dict[str, ModelCatalogEntry] = {}
        flagged: Dict[str, ModelCatalogEntry] = {}
        for entry in entries:
            if entry.key in table:
                raise ValueError(
                    f"Duplicate catalog entry for {entry.provider_id}/{entry.model_id}"
                )
            table[entry.key] = entry
            defaults.setdefault(entry.provider_id, entry)
            if entry.is_default:
                if entry.provider_id in flagged:
                    raise ValueError(f"Provider '{entry.provider_id}' has more than one default model")
                flagged[entry.provider_id] = entry
        defaults.update(flagged)
        self._table: Mapping[Tuple[str, str], ModelCatalogEntry] = MappingProxyType(table)
        self._defaults: Mapping[str, ModelCatalogEntry] = MappingProxyType(defaults)
        self.version = version

    def resolve(self, provider_id: str, model_id: Optional[str] = None) -> ModelCatalogEntry:
        """Return the entry for ``(provider_id, model_id)``.

        When ``model_id`` is ``None`` or blank, the provider's default entry is
        returned.

        Raises
        ------
        ModelNotFoundError
            If the pair is unknown, or the provider has no entries at all.
        """
        pid = (provider_id or "").strip().lower()
        mid = (model_id or "").strip()
        if not mid:
            entry = self._defaults.get(pid)
            if entry is None:
                raise ModelNotFoundError(pid, None)
            return entry
        entry = self._table.get((pid, mid))
        if entry is None:
            raise ModelNotFoundError(pid, mid)
        return entry

    def default_for(self, provider_id: str) -> Optional[ModelCatalogEntry]:
        return self._defaults.get((provider_id or "").strip().lower())

    def entries(self, provider_id: Optional[str] = None) -> List[ModelCatalogEntry]:
        """Return entries in catalog order, optionally for one provider."""
        if provider_id is None:
            return list(self._table.values())
        pid = provider_id.strip().lower()
        return [e for e in self._table.values() if e.provider_id == pid]

    def providers(self) -> List[str]:
        return list(self._defaults)

    def __len__(self) -> int:
        return len(self._table)


def default_catalog() -> ModelCatalog:
    """Return the catalog built from the bundled static data."""
    return ModelCatalog(CATALOG_ENTRIES, version=CATALOG_VERSION)


__all__ = ["ModelCatalog", "default_catalog"]
