"""SupportsEmbeddings Protocol (single-class module).

Optional capability for adapters that can turn text into a vector.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Protocol, runtime_checkable

if TYPE_CHECKING:  # pragma: no cover
    from ...config.provider_config import ProviderConfig


@runtime_checkable
class SupportsEmbeddings(Protocol):
    """Interface for adapters that implement text embedding."""

    async def embed(self, text: str, config: "ProviderConfig") -> List[float]:
        """Return the embedding vector for ``text``."""
        ...
