"""Shared testing utilities for the completion routing tests.

Exports:
    - make_config(backend, **overrides) -> ProviderConfig
    - make_store(*backends, default=None, fallback=False, models=None)
    - FakeAdapter: scripted ``CompletionAdapter`` recording every call
    - FakeEmbeddingAdapter: FakeAdapter that also implements ``embed``
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from completion_providers.base.backends import Backend
from completion_providers.base.models import CompletionRequest, CompletionResponse, TokenUsage
from completion_providers.config import ProviderConfig, ProviderConfigStore, DEFAULT_MODELS


def make_config(backend: Backend, **overrides: Any) -> ProviderConfig:
    values: Dict[str, Any] = {
        "backend": backend,
        "model": DEFAULT_MODELS[backend],
        "max_tokens": 4096,
        "temperature": 0.7,
        "api_key": "sk-live-123" if backend.is_cloud else None,
        "base_url": None,
    }
    values.update(overrides)
    return ProviderConfig(**values)


def make_store(
    *backends: Backend,
    default: Optional[Backend] = None,
    fallback: bool = False,
    models: Optional[Mapping[Backend, str]] = None,
) -> ProviderConfigStore:
    models = models or {}
    configs = {
        b: make_config(b, model=models[b]) if b in models else make_config(b)
        for b in backends
    }
    return ProviderConfigStore(configs, default=default, fallback_enabled=fallback)


class FakeAdapter:
    """Scripted adapter: returns ``text`` or raises ``error``."""

    def __init__(self, backend: Backend, *, text: str = "ok", error: Optional[BaseException] = None) -> None:
        self._backend = backend
        self.text = text
        self.error = error
        self.calls: List[Tuple[CompletionRequest, ProviderConfig]] = []

    @property
    def backend(self) -> Backend:
        return self._backend

    async def complete(self, request: CompletionRequest, config: ProviderConfig) -> CompletionResponse:
        self.calls.append((request, config))
        if self.error is not None:
            raise self.error
        return CompletionResponse(
            text=self.text,
            provider=self._backend.value,
            model=config.model,
            usage=TokenUsage.from_counts(3, 2),
        )


class FakeEmbeddingAdapter(FakeAdapter):
    def __init__(self, backend: Backend, *, vector: Iterable[float] = (0.1, 0.2, 0.3), **kwargs: Any) -> None:
        super().__init__(backend, **kwargs)
        self.vector = list(vector)
        self.embedded: List[str] = []

    async def embed(self, text: str, config: ProviderConfig) -> List[float]:
        self.embedded.append(text)
        if self.error is not None:
            raise self.error
        return list(self.vector)


def fakes(*backends: Backend, failing: Iterable[Backend] = ()) -> Dict[Backend, FakeAdapter]:
    """One FakeAdapter per backend; those in ``failing`` raise a transport error."""
    from completion_providers.base.errors import AdapterTransportError

    failing = set(failing)
    out: Dict[Backend, FakeAdapter] = {}
    for b in backends:
        err = AdapterTransportError(message=f"{b.value} down", provider=b.value) if b in failing else None
        out[b] = FakeAdapter(b, text=f"from {b.value}", error=err)
    return out
