"""Static model capability catalog and capability-driven backend selection.

The catalog is a read-only table mapping a model name to the capability tags
it is known to handle well. Selection compares each configured backend's
*default* model against the requested tags; it never picks a non-default model
for a backend.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple, TYPE_CHECKING

from ..backends import Backend
from ..errors import ConfigurationError

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ...config.store import ProviderConfigStore


class Capability(str, Enum):
    """Capability tags a request may ask for."""

    CODE = "code"
    REASONING = "reasoning"
    CREATIVE = "creative"
    INSTRUCTION = "instruction"
    VISION = "vision"

    @classmethod
    def parse(cls, value: "str | Capability") -> Optional["Capability"]:
        if isinstance(value, Capability):
            return value
        name = str(value).strip().lower()
        for cap in cls:
            if cap.value == name:
                return cap
        return None


_ALL = frozenset(Capability)

MODEL_CAPABILITIES: Mapping[str, FrozenSet[Capability]] = {
    "gpt-4o": _ALL,
    "gpt-4-turbo": _ALL - {Capability.VISION},
    "gpt-3.5-turbo": frozenset({Capability.CODE, Capability.INSTRUCTION, Capability.CREATIVE}),
    "claude-3-opus-20240229": _ALL,
    "claude-3-sonnet-20240229": _ALL,
    "claude-3-haiku-20240307": _ALL - {Capability.REASONING},
    "gemini-pro": _ALL - {Capability.VISION},
    "gemini-pro-vision": _ALL,
    "llama-3": _ALL - {Capability.VISION},
    "mistral-7b": frozenset({Capability.CODE, Capability.INSTRUCTION}),
}

# Model families advertised per backend by the model listing endpoint.
BACKEND_MODELS: Mapping[Backend, Tuple[str, ...]] = {
    Backend.OPENAI: ("gpt-4o", "gpt-4-turbo", "gpt-3.5-turbo"),
    Backend.ANTHROPIC: ("claude-3-opus-20240229", "claude-3-sonnet-20240229", "claude-3-haiku-20240307"),
    Backend.GOOGLE: ("gemini-pro", "gemini-pro-vision"),
    Backend.COHERE: ("command", "command-light"),
    Backend.LMSTUDIO: ("llama-3", "mistral-7b"),
    Backend.OLLAMA: ("llama3", "mistral"),
    Backend.DIRECT: ("llama-3-8b-q4", "mistral-7b-q4"),
}

# Sentinel match count for a preferred backend that is not configured.
_UNCONFIGURED = -1


def _coerce_capabilities(requested: Iterable["str | Capability"]) -> FrozenSet[Capability]:
    out = set()
    for item in requested:
        cap = Capability.parse(item)
        if cap is not None:
            out.add(cap)
    return frozenset(out)


class CapabilityCatalog:
    """Read-only capability lookup and best-match selection.

    Safe for concurrent reads; nothing is mutated after construction.
    """

    def __init__(
        self,
        models: Optional[Mapping[str, Iterable["str | Capability"]]] = None,
        backend_models: Optional[Mapping[Backend, Iterable[str]]] = None,
    ) -> None:
        source = MODEL_CAPABILITIES if models is None else models
        self._models: Dict[str, FrozenSet[Capability]] = {
            name: _coerce_capabilities(caps) for name, caps in source.items()
        }
        listing = BACKEND_MODELS if backend_models is None else backend_models
        self._backend_models: Dict[Backend, Tuple[str, ...]] = {
            b: tuple(names) for b, names in listing.items()
        }

    def capabilities_for(self, model: str) -> Optional[FrozenSet[Capability]]:
        return self._models.get(model)

    def has_capability(self, model: str, capability: "str | Capability") -> bool:
        """Return True when ``model`` is known and declares ``capability``.

        Unknown models and unknown capability names yield False.
        """
        cap = Capability.parse(capability)
        caps = self._models.get(model)
        return cap is not None and caps is not None and cap in caps

    def models_for(self, backend: "Backend | str") -> List[Dict[str, object]]:
        """List the model family of ``backend`` with each model's capabilities."""
        parsed = Backend.parse(backend)
        if parsed is None:
            return []
        out: List[Dict[str, object]] = []
        for name in self._backend_models.get(parsed, ()):
            caps = self._models.get(name, frozenset())
            out.append({"name": name, "capabilities": sorted(c.value for c in caps)})
        return out

    def _match_count(self, model: str, requested: FrozenSet[Capability]) -> int:
        caps = self.capabilities_for(model)
        if not caps:
            return 0
        return len(requested & caps)

    def best_match(
        self,
        store: "ProviderConfigStore",
        requested: Iterable["str | Capability"],
        preferred: "Backend | str | None" = None,
    ) -> Tuple[Backend, str]:
        """Pick the configured backend whose default model covers the most tags.

        Parameters
        ----------
        store:
            Configuration store listing the usable backends and their default
            models.
        requested:
            Capability tags the caller needs.
        preferred:
            Backend to favour; defaults to ``store.default``.

        Returns
        -------
        tuple[Backend, str]
            Winning backend and its default model. When no other backend beats
            the preferred one, the preferred backend and its own default model
            are returned even if it covers none of the tags.

        Raises
        ------
        ConfigurationError
            When there is no preferred backend and no default.
        """
        pref = Backend.parse(preferred) if preferred is not None else store.default
        if pref is None:
            raise ConfigurationError(message="No LLM providers are configured")
        wanted = _coerce_capabilities(requested)

        pref_cfg = store.get(pref)
        if pref_cfg is not None:
            best_count = self._match_count(pref_cfg.model, wanted)
            if best_count == len(wanted):
                return pref, pref_cfg.model
        else:
            best_count = _UNCONFIGURED
        best: Optional[Tuple[Backend, str]] = None

        for backend in store.configured():
            if backend is pref:
                continue
            cfg = store.get(backend)
            if cfg is None:
                continue
            count = self._match_count(cfg.model, wanted)
            if count > best_count:
                best_count = count
                best = (backend, cfg.model)
                if count == len(wanted):
                    break

        if best is not None:
            return best
        if pref_cfg is not None:
            return pref, pref_cfg.model
        raise ConfigurationError(
            message=f"Provider {pref.value} is not configured",
            provider=pref.value,
        )


__all__ = [
    "Capability",
    "CapabilityCatalog",
    "MODEL_CAPABILITIES",
    "BACKEND_MODELS",
]
