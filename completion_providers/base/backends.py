"""Backend identifiers.

The closed set of text-generation backends this package can route to. The
declaration order of :class:`Backend` is significant: it is the iteration
order of the configuration store, of the capability scan, and (split into
cloud then local groups) of the fallback chain.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple


class Backend(str, Enum):
    """Canonical backend identifiers (values are the public wire names)."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    COHERE = "cohere"
    LMSTUDIO = "lmstudio"
    OLLAMA = "ollama"
    DIRECT = "direct"

    @property
    def is_cloud(self) -> bool:
        return self in CLOUD_BACKENDS

    @classmethod
    def parse(cls, value: "str | Backend | None") -> Optional["Backend"]:
        """Return the backend for ``value`` (case-insensitive) or ``None``."""
        if value is None or isinstance(value, Backend):
            return value
        name = str(value).strip().lower()
        for backend in cls:
            if backend.value == name:
                return backend
        return None


CLOUD_BACKENDS: Tuple[Backend, ...] = (
    Backend.OPENAI,
    Backend.ANTHROPIC,
    Backend.GOOGLE,
    Backend.COHERE,
)

LOCAL_BACKENDS: Tuple[Backend, ...] = (
    Backend.LMSTUDIO,
    Backend.OLLAMA,
    Backend.DIRECT,
)


__all__ = ["Backend", "CLOUD_BACKENDS", "LOCAL_BACKENDS"]
