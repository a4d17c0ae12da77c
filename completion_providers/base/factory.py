"""Adapter factory.

Purpose
-------
Create backend adapter instances implementing the ``CompletionAdapter``
protocol from a :class:`Backend` identifier. Adapters are imported lazily using
``importlib`` so that an SDK is only loaded when its backend is actually
configured.

Timeout and fallback semantics
------------------------------
- No timeouts are introduced here. The factory performs no retries or
  fallbacks; it either returns an instance or raises a clear error.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple, Type

from .backends import Backend
from .errors import ConfigurationError


class UnknownBackendError(ConfigurationError):
    """Raised when a backend cannot be resolved or its adapter initialized.

    Failure modes include:
    - The backend name is not a known :class:`Backend`.
    - The adapter module cannot be imported or the adapter class is missing.
    - The adapter constructor raised an exception during initialization.
    """


class AdapterFactory:
    """Create adapters based on a backend identifier (e.g., ``"openai"``)."""

    # Map backends to import paths and class names
    _ADAPTERS: Dict[Backend, Dict[str, str]] = {
        Backend.OPENAI: {"module": "completion_providers.openai.client", "class": "OpenAIAdapter"},
        Backend.ANTHROPIC: {"module": "completion_providers.anthropic.client", "class": "AnthropicAdapter"},
        Backend.GOOGLE: {"module": "completion_providers.google.client", "class": "GoogleAdapter"},
        Backend.COHERE: {"module": "completion_providers.cohere.client", "class": "CohereAdapter"},
        Backend.LMSTUDIO: {"module": "completion_providers.lmstudio.client", "class": "LMStudioAdapter"},
        Backend.OLLAMA: {"module": "completion_providers.ollama.client", "class": "OllamaAdapter"},
        Backend.DIRECT: {"module": "completion_providers.direct.client", "class": "DirectProcessAdapter"},
    }

    @classmethod
    def create(cls, backend: "Backend | str", **kwargs: Any) -> Any:
        """Create an adapter instance.

        Parameters
        ----------
        backend:
            Backend identifier (enum member or its wire name).
        **kwargs:
            Adapter-specific constructor kwargs (e.g. an injected ``client``).

        Raises
        ------
        UnknownBackendError
            If the backend is unknown, the adapter module fails to import, the
            adapter class is missing, or the adapter constructor raises.
        """
        parsed = Backend.parse(backend)
        entry = cls._ADAPTERS.get(parsed) if parsed is not None else None
        if not entry:
            raise UnknownBackendError(message=f"Unknown provider '{backend}'", provider=str(backend))

        module_path, class_name = entry["module"], entry["class"]
        name = parsed.value

        try:
            mod = import_module(module_path)
        except Exception as exc:  # pragma: no cover - import failure path
            raise UnknownBackendError(
                message=f"Failed to import module '{module_path}' for provider '{name}': {exc}",
                provider=name,
                raw=exc,
            ) from exc

        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownBackendError(
                message=f"Adapter class '{class_name}' not found in '{module_path}' for provider '{name}'",
                provider=name,
                raw=exc,
            ) from exc

        try:
            return klass(**kwargs)
        except TypeError as exc:
            raise UnknownBackendError(
                message=f"Invalid arguments for '{name}' adapter constructor: {exc}",
                provider=name,
                raw=exc,
            ) from exc

    @classmethod
    def supports_embeddings(cls, backend: "Backend | str") -> bool:
        """Return True when the adapter class for ``backend`` defines ``embed``."""
        parsed = Backend.parse(backend)
        entry = cls._ADAPTERS.get(parsed) if parsed is not None else None
        if not entry:
            return False
        klass = getattr(import_module(entry["module"]), entry["class"], None)
        return callable(getattr(klass, "embed", None))

    @classmethod
    def supported(cls) -> Tuple[Backend, ...]:
        """Return the supported backends in declaration order."""
        return tuple(b for b in Backend if b in cls._ADAPTERS)


__all__ = ["AdapterFactory", "UnknownBackendError"]
