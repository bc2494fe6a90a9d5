"""
ChatRequestOptions DTO shared by blocking and streaming invocations.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and immutable copies.

Notes
-----
An unspecified ``model`` is filled from the resolved catalog entry via
:meth:`ChatRequestOptions.with_catalog_defaults` before the request reaches a
provider. ``max_output_tokens`` is only checked against the entry's limit; when
unset it stays ``None`` and the vendor default applies (adapters whose API
requires a value supply the catalog limit themselves).
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..errors import ConfigurationError
from .catalog_entry import ModelCatalogEntry


class ChatRequestOptions(BaseModel):
    """Validated request options accepted by every provider.

    Attributes
    ----------
    model:
        Vendor model id. ``None`` means "use the catalog default".
    temperature:
        Sampling temperature in ``[0, 2]``; ``None`` leaves the vendor default.
    max_output_tokens:
        Completion token cap; ``None`` leaves the vendor default.
    stream:
        Whether the caller intends to consume a streamed response.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    model: Optional[str] = None
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_output_tokens: Optional[int] = Field(default=None, gt=0)
    stream: bool = False

    def with_catalog_defaults(self, entry: ModelCatalogEntry) -> "ChatRequestOptions":
        """Return a copy bound to ``entry``'s model id.

        Raises
        ------
        ConfigurationError
            When ``max_output_tokens`` exceeds the entry's limit.
        """
        if self.max_output_tokens is not None and self.max_output_tokens > entry.max_output_tokens:
            raise ConfigurationError(
                f"max_output_tokens {self.max_output_tokens} exceeds the limit of "
                f"{entry.max_output_tokens} for {entry.provider_id}/{entry.model_id}",
                provider=entry.provider_id,
            )
        return self.model_copy(update={"model": entry.model_id})


__all__ = ["ChatRequestOptions"]
