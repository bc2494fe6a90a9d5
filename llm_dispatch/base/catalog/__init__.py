"""Model catalog package: lookup class plus bundled static data."""

from .catalog import ModelCatalog, default_catalog
from .catalog_data import CATALOG_ENTRIES, CATALOG_VERSION

__all__ = ["ModelCatalog", "default_catalog", "CATALOG_ENTRIES", "CATALOG_VERSION"]
