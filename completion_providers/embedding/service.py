"""Embedding sub-service.

Turns text into a vector using the selected backend's adapter. There is no
capability matching and no fallback: the explicit backend (or the store
default) either supports embeddings or the call fails.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional

from ..base.backends import Backend
from ..base.errors import ConfigurationError, EmbeddingUnsupportedError
from ..base.factory import AdapterFactory
from ..base.interfaces import CompletionAdapter, SupportsEmbeddings
from ..base.logging import LogContext, get_logger, log_event
from ..config.store import ProviderConfigStore


class EmbeddingService:
    """Dispatch ``embed`` calls to embedding-capable adapters."""

    def __init__(
        self,
        store: ProviderConfigStore,
        adapters: Mapping[Backend, CompletionAdapter],
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._store = store
        self._adapters: Dict[Backend, CompletionAdapter] = dict(adapters)
        self._logger = logger or get_logger("providers.embedding")

    def supports(self, backend: "Backend | str") -> bool:
        """Whether ``backend`` can embed text, configured or not."""
        parsed = Backend.parse(backend)
        if parsed is None:
            return False
        adapter = self._adapters.get(parsed)
        if adapter is not None:
            return isinstance(adapter, SupportsEmbeddings)
        return AdapterFactory.supports_embeddings(parsed)

    async def embed(self, text: str, backend: "Backend | str | None" = None) -> List[float]:
        """Return the embedding vector for ``text``.

        Raises:
            ConfigurationError: No backend could be resolved, or the resolved
                backend is not configured.
            EmbeddingUnsupportedError: The backend cannot embed text.
        """
        selected = Backend.parse(backend) if backend is not None else self._store.default
        if selected is None:
            raise ConfigurationError(
                message=f"Unknown provider: {backend}" if backend is not None else "No LLM providers are configured",
                provider=str(backend) if backend is not None else "unknown",
            )
        adapter = self._adapters.get(selected)
        if not self.supports(selected):
            raise EmbeddingUnsupportedError(
                message=f"Embedding not implemented for provider: {selected.value}",
                provider=selected.value,
            )
        config = self._store.get(selected)
        if config is None or adapter is None:
            raise ConfigurationError(
                message=f"Provider {selected.value} is not configured",
                provider=selected.value,
            )
        log_event(self._logger, "embedding.route", LogContext(provider=selected.value), chars=len(text))
        return await adapter.embed(text, config)


__all__ = ["EmbeddingService"]
