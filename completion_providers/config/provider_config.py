"""ProviderConfig value object.

One immutable instance per configured backend, built once by
:class:`~completion_providers.config.ProviderConfigStore` at startup.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..base.backends import Backend


@dataclass(frozen=True)
class ProviderConfig:
    """Per-backend configuration.

    Attributes:
        backend: Backend this configuration belongs to.
        model: Default model identifier.
        max_tokens: Default completion token cap.
        temperature: Default sampling temperature.
        api_key: Credential for cloud backends.
        base_url: Endpoint override (HTTP backends) or models directory
            (local process backend).
        organization: Optional organization/tenant hint (OpenAI).
        extra: Backend-specific parameters merged last into outbound payloads.
            Stored as a read-only copy of the mapping passed in.
    """

    backend: Backend
    model: str
    max_tokens: int
    temperature: float
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    organization: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))


__all__ = ["ProviderConfig"]
