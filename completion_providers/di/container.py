"""Minimal dependency injection container for the completion layer.

Goals:
- Centralize construction of the shared store, catalog, process registry,
  adapters, router and embedding service.
- Let tests inject a prepared store or fake adapters without touching call
  sites.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..base.backends import Backend
from ..base.capabilities import CapabilityCatalog
from ..base.factory import AdapterFactory
from ..base.http import close_all_clients
from ..base.interfaces import CompletionAdapter
from ..base.logging import get_logger, log_event
from ..base.processes import ProcessRegistry
from ..base.routing import CompletionRouter
from ..config.store import ProviderConfigStore
from ..embedding import EmbeddingService


class ProvidersContainer:
    """Dependency injection container for routing services and singletons.

    Every accessor builds its object on first use and returns the same
    instance afterwards.
    """

    def __init__(
        self,
        store: Optional[ProviderConfigStore] = None,
        adapters: Optional[Mapping[Backend, CompletionAdapter]] = None,
        catalog: Optional[CapabilityCatalog] = None,
    ) -> None:
        """Initialize the container.

        Args:
            store: Prepared configuration store; read from the environment
                when omitted.
            adapters: Adapter overrides keyed by backend. Configured backends
                without an override get an adapter from :class:`AdapterFactory`.
            catalog: Capability catalog; the built-in table when omitted.
        """
        self._store = store
        self._adapter_overrides: Dict[Backend, CompletionAdapter] = dict(adapters or {})
        self._catalog = catalog
        self._singletons: Dict[str, Any] = {}
        self._logger = get_logger("providers.container")

    # ---- Shared singletons ----
    def store(self) -> ProviderConfigStore:
        if self._store is None:
            self._store = ProviderConfigStore.from_env()
        return self._store

    def catalog(self) -> CapabilityCatalog:
        if self._catalog is None:
            self._catalog = CapabilityCatalog()
        return self._catalog

    def process_registry(self) -> ProcessRegistry:
        if "process_registry" not in self._singletons:
            self._singletons["process_registry"] = ProcessRegistry()
        return self._singletons["process_registry"]

    # ---- Adapters ----
    def adapters(self) -> Dict[Backend, CompletionAdapter]:
        """Return one adapter per configured backend, creating them once."""
        if "adapters" not in self._singletons:
            built: Dict[Backend, CompletionAdapter] = {}
            for backend in self.store().configured():
                if backend in self._adapter_overrides:
                    built[backend] = self._adapter_overrides[backend]
                elif backend is Backend.DIRECT:
                    built[backend] = AdapterFactory.create(backend, registry=self.process_registry())
                else:
                    built[backend] = AdapterFactory.create(backend)
            self._singletons["adapters"] = built
            log_event(self._logger, "container.adapters", backends=[b.value for b in built])
        return self._singletons["adapters"]

    def adapter(self, backend: "Backend | str") -> Optional[CompletionAdapter]:
        parsed = Backend.parse(backend)
        return self.adapters().get(parsed) if parsed is not None else None

    # ---- Services ----
    def router(self) -> CompletionRouter:
        if "router" not in self._singletons:
            self._singletons["router"] = CompletionRouter(self.store(), self.adapters(), self.catalog())
        return self._singletons["router"]

    def embeddings(self) -> EmbeddingService:
        if "embeddings" not in self._singletons:
            self._singletons["embeddings"] = EmbeddingService(self.store(), self.adapters())
        return self._singletons["embeddings"]

    async def shutdown(self) -> None:
        """Kill running local processes and close every HTTP/SDK client."""
        killed = self.process_registry().terminate_all()
        for adapter in self._singletons.get("adapters", {}).values():
            aclose = getattr(adapter, "aclose", None)
            if callable(aclose):
                await aclose()
        await close_all_clients()
        log_event(self._logger, "container.shutdown", killed_processes=killed)

    def clear(self) -> None:  # testing convenience
        """Drop cached singletons (the injected store and overrides are kept)."""
        self._singletons.clear()


def build_container(store: Optional[ProviderConfigStore] = None) -> ProvidersContainer:
    """Construct a container reading configuration from the environment."""
    return ProvidersContainer(store=store)


__all__ = ["ProvidersContainer", "build_container"]
